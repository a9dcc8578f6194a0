from fastapi.testclient import TestClient

from db import SessionLocal
from main import app
from models import QuizAttempt

client = TestClient(app)

ALL_RIGHT = {
    "fb-1": "a",
    "fb-2": ["c", "a"],
    "fb-3": "8",
    "fb-4": ["1/8", "1/4", "1/2"],
    "fb-5": ["s1", "s3"],
    "fb-6": ["r0c0", "r1c1", "r1c2"],
}


def test_evaluate_single_question():
    q = {
        "id": "q",
        "kind": "multi",
        "prompt": "?",
        "choices": [
            {"id": "a", "label": "A", "correct": True},
            {"id": "b", "label": "B"},
            {"id": "c", "label": "C", "correct": True},
        ],
    }
    r = client.post("/quiz/evaluate", json={"question": q, "answer": ["a", "c"]})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "correct": True}

    r = client.post("/quiz/evaluate", json={"question": q, "answer": ["a"]})
    assert r.json()["correct"] is False


def test_evaluate_rejects_unknown_kind():
    r = client.post("/quiz/evaluate", json={"question": {"id": "q", "kind": "essay"}, "answer": 1})
    assert r.status_code == 422


def test_grade_full_marks():
    payload = {"userId": "u1", "answers": ALL_RIGHT}
    r = client.post("/quiz-banks/fractions-basics/grade", json=payload)
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["bankId"] == "fractions-basics"
    assert body["score"] == 7 and body["maxScore"] == 7  # fb-2 is worth 2
    assert all(d["correct"] for d in body["details"])
    assert isinstance(body["attemptId"], int)


def test_grade_no_partial_credit():
    answers = {**ALL_RIGHT, "fb-1": "b", "fb-2": ["a"]}
    body = client.post("/quiz-banks/fractions-basics/grade", json={"answers": answers}).json()
    assert body["score"] == 4
    details = {d["questionId"]: d for d in body["details"]}
    assert details["fb-2"]["correct"] is False
    assert details["fb-2"]["userAnswer"] == ["a"]


def test_grade_missing_answers_score_zero():
    body = client.post("/quiz-banks/geometry-lines-angles/grade", json={}).json()
    assert body["score"] == 0 and body["maxScore"] == 3
    assert all(d["userAnswer"] is None for d in body["details"])


def test_grade_unknown_bank():
    r = client.post("/quiz-banks/missing/grade", json={"answers": {}})
    assert r.status_code == 404


def test_grade_records_attempt_roundtrip():
    r = client.post(
        "/quiz-banks/geometry-lines-angles/grade",
        json={"userId": "u2", "answers": {"gla-1": ["p1", "p2"], "gla-2": 59}, "tookSeconds": 42},
    )
    assert r.status_code == 200
    attempt_id = r.json()["attemptId"]

    r2 = client.get(f"/attempts/{attempt_id}")
    assert r2.status_code == 200
    a = r2.json()
    assert a["id"] == attempt_id
    assert a["bank_id"] == "geometry-lines-angles"
    assert a["user_id"] == "u2"
    assert (a["score"], a["max_score"]) == (2, 3)
    assert a["took_seconds"] == 42
    assert len(a["items"]) == 3


def test_grade_measures_duration_when_not_sent():
    body = client.post("/quiz-banks/fractions-basics/grade", json={"answers": ALL_RIGHT}).json()
    with SessionLocal() as db:
        a = db.get(QuizAttempt, body["attemptId"])
        assert a is not None
        assert isinstance(a.took_seconds, int)
        assert a.took_seconds >= 0


def test_get_attempt_404():
    r = client.get("/attempts/999999")
    assert r.status_code == 404


def test_recent_attempts_requires_client(monkeypatch):
    monkeypatch.setenv("TUTOR_API_KEY", "client-key")
    monkeypatch.setenv("ADMIN_TOKEN", "admin")
    client.post("/quiz-banks/fractions-basics/grade", json={"userId": "u3", "answers": ALL_RIGHT})

    assert client.get("/attempts/recent-list").status_code == 401

    r = client.get(
        "/attempts/recent-list", params={"userId": "u3"}, headers={"x-admin-token": "admin"}
    )
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True and body["count"] >= 1
    assert all(row["user_id"] == "u3" for row in body["items"])
    assert "items" not in body["items"][0]
