from quiz_eval import details_as_items, evaluate_question, grade_quiz, shuffle
from schemas.quiz import (
    MultiQuestion,
    NumericQuestion,
    OrderingQuestion,
    SingleQuestion,
    VisualQuestion,
)

SINGLE = SingleQuestion.model_validate(
    {
        "id": "s",
        "kind": "single",
        "prompt": "Pick one",
        "choices": [{"id": "a", "label": "A"}, {"id": "b", "label": "B", "correct": True}],
    }
)

MULTI = MultiQuestion.model_validate(
    {
        "id": "m",
        "kind": "multi",
        "prompt": "Pick all",
        "points": 2,
        "choices": [
            {"id": "a", "label": "A", "correct": True},
            {"id": "b", "label": "B"},
            {"id": "c", "label": "C", "correct": True},
        ],
    }
)

NUMERIC = NumericQuestion.model_validate(
    {"id": "n", "kind": "numeric", "prompt": "6 x 7", "answer": 42}
)

ORDERING = OrderingQuestion.model_validate(
    {
        "id": "o",
        "kind": "ordering",
        "prompt": "Smallest first",
        "items": ["3", "1", "2"],
        "correctOrder": ["1", "2", "3"],
    }
)

ANGLE = VisualQuestion.model_validate(
    {
        "id": "v",
        "kind": "visual",
        "prompt": "Angle?",
        "visual": {"subtype": "angle", "aDeg": 0, "bDeg": 60, "targetDeg": 60, "toleranceDeg": 2},
    }
)


def test_single_choice():
    assert evaluate_question(SINGLE, "b") is True
    assert evaluate_question(SINGLE, "a") is False
    assert evaluate_question(SINGLE, ["b"]) is False
    assert evaluate_question(SINGLE, None) is False


def test_single_without_correct_choice_never_matches():
    q = SingleQuestion.model_validate(
        {"id": "x", "kind": "single", "prompt": "?", "choices": [{"id": "a", "label": "A"}]}
    )
    assert evaluate_question(q, None) is False
    assert evaluate_question(q, "a") is False


def test_multi_requires_exact_set():
    assert evaluate_question(MULTI, ["a", "c"]) is True
    assert evaluate_question(MULTI, ["c", "a"]) is True
    assert evaluate_question(MULTI, ["a"]) is False
    assert evaluate_question(MULTI, ["a", "b", "c"]) is False
    assert evaluate_question(MULTI, []) is False
    assert evaluate_question(MULTI, ["a", "a", "c"]) is False


def test_multi_malformed_answers():
    assert evaluate_question(MULTI, "a,c") is False
    assert evaluate_question(MULTI, [{"id": "a"}, "c"]) is False
    assert evaluate_question(MULTI, {"a": True}) is False


def test_numeric_exact():
    assert evaluate_question(NUMERIC, 42) is True
    assert evaluate_question(NUMERIC, 42.0) is True
    assert evaluate_question(NUMERIC, " 42 ") is True
    assert evaluate_question(NUMERIC, 42.01) is False
    assert evaluate_question(NUMERIC, "forty-two") is False
    assert evaluate_question(NUMERIC, "") is False
    assert evaluate_question(NUMERIC, True) is False
    assert evaluate_question(NUMERIC, float("nan")) is False
    assert evaluate_question(NUMERIC, 10**400) is False


def test_ordering_exact_sequence():
    assert evaluate_question(ORDERING, ["1", "2", "3"]) is True
    assert evaluate_question(ORDERING, ["1", "3", "2"]) is False
    assert evaluate_question(ORDERING, ["1", "2"]) is False
    assert evaluate_question(ORDERING, "123") is False


def test_visual_delegates_to_subtype():
    assert evaluate_question(ANGLE, 60) is True
    assert evaluate_question(ANGLE, 58) is True
    assert evaluate_question(ANGLE, 56) is False


def test_grade_quiz_sums_points_of_correct_answers():
    questions = [SINGLE, MULTI, NUMERIC, ORDERING, ANGLE]
    answers = {"s": "b", "m": ["a", "c"], "n": 41, "o": ["1", "2", "3"]}

    result = grade_quiz(questions, answers)

    assert result.max_score == 6  # MULTI is worth 2
    assert result.score == 4
    by_id = {d.question_id: d for d in result.details}
    assert by_id["m"].correct and by_id["m"].points == 2
    assert not by_id["n"].correct and by_id["n"].user_answer == 41
    assert not by_id["v"].correct and by_id["v"].user_answer is None


def test_grade_quiz_empty():
    result = grade_quiz([], {})
    assert result.score == 0 and result.max_score == 0 and result.details == []


def test_details_as_items_uses_wire_names():
    items = details_as_items(grade_quiz([SINGLE], {"s": "b"}))
    assert items == [{"questionId": "s", "correct": True, "points": 1, "userAnswer": "b"}]


def test_shuffle_returns_permutation_copy():
    items = list(range(20))
    out = shuffle(items)
    assert sorted(out) == items
    assert items == list(range(20))
