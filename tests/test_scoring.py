"""Unit tests for guess scoring and streak rules."""
import pytest

from app.models.passage import SourceType
from app.services.scoring import accuracy, is_correct, next_streak, performance_rating, score_delta


@pytest.mark.parametrize(
    "guess, truth, expected",
    [
        ("human", SourceType.HUMAN, True),
        ("ai", SourceType.AI, True),
        ("ai", SourceType.HUMAN, False),
        (SourceType.HUMAN, "ai", False),
    ],
)
def test_is_correct(guess, truth, expected):
    assert is_correct(guess, truth) is expected


def test_is_correct_rejects_unknown_source():
    with pytest.raises(ValueError):
        is_correct("robot", SourceType.AI)


def test_score_delta():
    assert score_delta(True) == 1
    assert score_delta(False) == 0


def test_streak_sequence():
    """Correct answers extend the streak, any miss resets it."""
    streak = 0
    history = []
    for correct in [True, True, False, True, True, True, False]:
        streak = next_streak(streak, correct)
        history.append(streak)
    assert history == [1, 2, 0, 1, 2, 3, 0]


def test_accuracy():
    assert accuracy(0, 0) == 0.0
    assert accuracy(1, 3) == 33.3
    assert accuracy(4, 4) == 100.0


def test_performance_rating():
    assert performance_rating(0, 0) == "incomplete"
    assert performance_rating(9, 10) == "excellent"
    assert performance_rating(8, 10) == "great"
    assert performance_rating(7, 10) == "good"
    assert performance_rating(6, 10) == "fair"
    assert performance_rating(1, 10) == "needs_improvement"


@pytest.mark.parametrize(
    "correct_count, answered, avg_time_ms, expected",
    [
        (9, 10, 5000, "excellent"),
        (9, 10, 5001, "great"),
        (9, 10, 8001, "good"),
        (8, 10, 12000, "good"),
        (4, 4, 60000, "fair"),
        (7, 10, 12001, "fair"),
        (5, 10, 100, "needs_improvement"),
        (0, 0, 60000, "incomplete"),
    ],
)
def test_performance_rating_needs_speed_for_top_bands(correct_count, answered, avg_time_ms, expected):
    assert performance_rating(correct_count, answered, avg_time_ms) == expected
