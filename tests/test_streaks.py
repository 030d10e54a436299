from datetime import date

from src.steady.models import Habit
from src.steady.period import Period
from src.steady.streaks import compute_streak, refresh_streak


def test_trailing_run_after_gap():
    assert compute_streak([True, True, False, True], 3) == 1


def test_unbroken_run_to_today():
    assert compute_streak([True, True, True], 2) == 3


def test_missed_today_means_zero():
    for history in ([False], [True, False], [True, True, True, False, True]):
        assert compute_streak(history, history.index(False)) == 0


def test_run_of_k_ending_at_today():
    for k in range(0, 8):
        history = [True] * 3 + [False] + [True] * k + [False] * 5
        today = 3 + k
        assert compute_streak(history, today) == k


def test_earlier_longer_run_is_ignored():
    history = [True] * 10 + [False] + [True, True]
    assert compute_streak(history, 12) == 2


def test_index_past_end_clamps_to_last_day():
    assert compute_streak([False, True, True], 30) == 2
    assert compute_streak([True, False], 99) == 0


def test_negative_index_and_empty_history():
    assert compute_streak([True, True], -1) == 0
    assert compute_streak([], 0) == 0


def test_refresh_streak_updates_habit():
    habit = Habit(id=1, name="Read", category="Growth", goal=10, streak=42, history=[True, True, False, True])
    assert refresh_streak(habit, 3) == 1
    assert habit.streak == 1


def test_period_today_index_is_clamped():
    assert Period(days=31, today=date(2026, 10, 17)).today_index == 16
    assert Period(days=28, today=date(2026, 10, 31)).today_index == 27
    assert Period(days=31, today=date(2026, 10, 1)).today_index == 0


def test_period_labels():
    period = Period(days=31, today=date(2026, 10, 17))
    assert period.label() == "Saturday, October 17, 2026"
    assert period.day_numbers()[0] == 1
    assert period.day_numbers()[-1] == 31
    assert period.is_today(16)
    assert not period.is_today(17)
