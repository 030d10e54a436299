from __future__ import annotations

from typing import Sequence

from .models import Habit


def compute_streak(history: Sequence[bool], today_index: int) -> int:
    """Count completed days running back from ``today_index``.

    The walk stops at the first missed day, so an earlier long run does not
    count once a gap sits between it and today. An index past the end of the
    history is treated as the last tracked day; a negative index means there
    is nothing to count.
    """
    if not history or today_index < 0:
        return 0
    cursor = min(today_index, len(history) - 1)
    streak = 0
    while cursor >= 0 and history[cursor]:
        streak += 1
        cursor -= 1
    return streak


def refresh_streak(habit: Habit, today_index: int) -> int:
    habit.streak = compute_streak(habit.history, today_index)
    return habit.streak
