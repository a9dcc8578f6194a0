import json

import pytest
from fastapi.testclient import TestClient

import bank
from main import app
from schemas.quiz import DEFAULT_BANK, ensure_quiz_bank

client = TestClient(app)


@pytest.fixture
def custom_bank_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("QUIZ_BANK_DIR", str(tmp_path))
    yield tmp_path
    monkeypatch.delenv("QUIZ_BANK_DIR")
    bank.reload_bank()


def test_list_quiz_banks():
    r = client.get("/quiz-banks")
    assert r.status_code == 200
    ids = {b["quizBankId"] for b in r.json()}
    assert {"fractions-basics", "geometry-lines-angles"} <= ids


def test_get_quiz_bank_in_stored_order():
    r = client.get("/quiz-banks/fractions-basics", params={"shuffle": False})
    assert r.status_code == 200
    body = r.json()
    assert body["quizBankId"] == "fractions-basics"
    assert body["timeLimitSec"] == 600
    assert [q["id"] for q in body["questions"]] == [f"fb-{i}" for i in range(1, 7)]
    assert body["questions"][3]["correctOrder"] == ["1/8", "1/4", "1/2"]


def test_get_quiz_bank_seeded_shuffle_is_stable():
    params = {"shuffle": True, "seed": 7}

    def ids():
        body = client.get("/quiz-banks/fractions-basics", params=params).json()
        return [q["id"] for q in body["questions"]]

    a, b = ids(), ids()
    assert a == b
    assert sorted(a) == [f"fb-{i}" for i in range(1, 7)]


def test_get_quiz_bank_404():
    r = client.get("/quiz-banks/missing")
    assert r.status_code == 404


def test_visible_requires_topic():
    r = client.post("/quiz-banks/visible", json={"completedVideoIds": []})
    assert r.status_code == 400


def test_visible_banks_unlock_rules():
    r = client.post(
        "/quiz-banks/visible", json={"topicId": "fractions", "completedVideoIds": ["v1"]}
    )
    assert r.status_code == 200
    assert r.json()["visible"] == []

    r = client.post(
        "/quiz-banks/visible",
        json={"topicId": "fractions", "completedVideoIds": ["vid-angles-1", "vid-angles-2"]},
    )
    visible = {v["bankId"] for v in r.json()["visible"]}
    assert visible == {"fractions-basics", "geometry-lines-angles"}


def test_all_banks_progress_messages():
    r = client.post(
        "/quiz-banks/all", json={"topicId": "fractions", "completedVideoIds": ["vid-angles-1"]}
    )
    assert r.status_code == 200
    banks = {b["id"]: b for b in r.json()["banks"]}
    assert "asg-retired" not in banks

    topic = banks["asg-fractions-topic"]
    assert topic["isUnlocked"] is False
    assert (topic["completedCount"], topic["requiredCount"]) == (1, 2)
    assert topic["progressMessage"] == "Complete 1 more video to unlock"

    video_set = banks["asg-angles-set"]
    assert video_set["completedCount"] == 1
    assert video_set["progressMessage"] == "Complete 1 more video from this set to unlock"


def test_ensure_quiz_bank_defaults():
    assert ensure_quiz_bank(None) == DEFAULT_BANK
    b = ensure_quiz_bank({"quizBankId": "x", "title": "X", "questions": "oops"})
    assert b.questions == [] and b.shuffle is False and b.time_limit_sec == 0


def test_reload_skips_invalid_records(custom_bank_dir):
    good = {"quizBankId": "good", "title": "Good", "questions": []}
    bad = {"quizBankId": "bad", "title": "Bad", "questions": [{"id": "q", "kind": "essay"}]}
    (custom_bank_dir / "good.json").write_text(json.dumps(good), encoding="utf-8")
    (custom_bank_dir / "bad.json").write_text(json.dumps(bad), encoding="utf-8")
    (custom_bank_dir / "broken.json").write_text("{not json", encoding="utf-8")
    (custom_bank_dir / "more.jsonl").write_text(
        "# comment\n" + json.dumps({"quizBankId": "line", "title": "L"}) + "\n{oops\n",
        encoding="utf-8",
    )

    assert bank.reload_bank() == 2
    assert {b.quiz_bank_id for b in bank.list_banks()} == {"good", "line"}
    assert bank.get_bank("bad") is None
