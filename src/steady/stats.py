"""Derived numbers for the summary counters and the two charts.

Every method rescans the live collection; nothing is cached between calls.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from .models import CATEGORY_LABELS, Habit
from .period import Period


class StatsAggregator:
    def __init__(self, habits: Sequence[Habit], period: Period):
        # Held by reference so mutations through the store show up on the next call.
        self._habits = habits
        self.period = period

    def daily_progress(self, day_index: int) -> float:
        if not self._habits:
            return 0
        completed = sum(
            1 for habit in self._habits if 0 <= day_index < len(habit.history) and habit.history[day_index]
        )
        return completed / len(self._habits) * 100

    def global_completion_rate(self) -> int:
        if not self._habits:
            return 0
        total_checks = sum(habit.completions for habit in self._habits)
        total_possible = len(self._habits) * self.period.days
        return int(round(total_checks / total_possible * 100)) if total_possible else 0

    def completed_today(self) -> Tuple[int, int]:
        today = self.period.today_index
        count = sum(1 for habit in self._habits if today < len(habit.history) and habit.history[today])
        return count, len(self._habits)

    def best_streak(self) -> int:
        return max((habit.streak for habit in self._habits), default=0)

    def category_totals(self) -> Dict[str, int]:
        totals = {label: 0 for label in CATEGORY_LABELS}
        for habit in self._habits:
            totals[habit.bucket] += habit.completions
        return totals

    def progress_series(self) -> List[float]:
        return [self.daily_progress(index) for index in range(self.period.days)]

    def category_series(self) -> List[int]:
        return list(self.category_totals().values())

    @staticmethod
    def goal_progress(habit: Habit) -> Tuple[int, int, int]:
        completed = habit.completions
        if habit.goal <= 0:
            return completed, habit.goal, 100
        return completed, habit.goal, min(100, int(round(completed / habit.goal * 100)))

    def summary(self) -> Dict[str, Any]:
        done, total = self.completed_today()
        return {
            "global_progress": self.global_completion_rate(),
            "completed_today": done,
            "total_habits": total,
            "best_streak": self.best_streak(),
            "categories": self.category_totals(),
        }
