"""Guess scoring and streak rules."""
from app.models.passage import SourceType

# One point per correct guess; a wrong guess scores nothing and breaks the streak
POINTS_CORRECT = 1
POINTS_WRONG = 0

# Rating bands: (minimum accuracy percent, maximum average response ms or None, label).
# A session too slow for a band falls through to the next one.
RATING_BANDS = [
    (90.0, 5000, "excellent"),
    (80.0, 8000, "great"),
    (70.0, 12000, "good"),
    (60.0, None, "fair"),
]


def is_correct(guess: SourceType | str, truth: SourceType | str) -> bool:
    """Compare a guess to the passage's true source."""
    return SourceType(guess) == SourceType(truth)


def score_delta(correct: bool) -> int:
    return POINTS_CORRECT if correct else POINTS_WRONG


def next_streak(streak, correct: bool):
    """Streak after a guess: +1 when correct, reset to 0 otherwise.

    Also accepts a column expression, yielding the SQL for an in-place update.
    """
    return streak + 1 if correct else 0


def accuracy(correct_count: int, answered: int) -> float:
    """Percentage of correct answers, rounded to one decimal; 0.0 when nothing answered."""
    if not answered:
        return 0.0
    return round(correct_count / answered * 100, 1)


def performance_rating(correct_count: int, answered: int, avg_time_ms: float | None = None) -> str:
    """Label a session by accuracy and average response time.

    `incomplete` when nothing was answered; a missing average counts as instant.
    """
    if not answered:
        return "incomplete"
    pct = correct_count * 100 / answered
    avg_time_ms = avg_time_ms or 0
    for min_accuracy, max_time_ms, label in RATING_BANDS:
        if pct >= min_accuracy and (max_time_ms is None or avg_time_ms <= max_time_ms):
            return label
    return "needs_improvement"
