"""State-changing operations on the habit collection.

All writes to a habit's history go through here so the cached streak is
refreshed before the collection is saved. The list on the store is mutated in
place; readers holding a reference to it see the change straight away.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .config import settings
from .models import Habit, HabitValidationError, new_habit_id, parse_goal
from .store import HabitStore
from .streaks import refresh_streak

logger = logging.getLogger(__name__)


class HabitMutator:
    def __init__(self, store: HabitStore):
        self._store = store

    @property
    def store(self) -> HabitStore:
        return self._store

    def toggle_day(self, habit_id: int, day_index: int) -> bool:
        habit = self._store.get(habit_id)
        if habit is None:
            logger.debug("toggle_day: no habit %s", habit_id)
            return False
        if not 0 <= day_index < len(habit.history):
            logger.debug("toggle_day: day %s outside the period for habit %s", day_index, habit_id)
            return False
        habit.history[day_index] = not habit.history[day_index]
        refresh_streak(habit, self._store.period.today_index)
        self._store.save()
        logger.info("Toggled %s day %d -> %s", habit.name, day_index + 1, habit.history[day_index])
        return True

    def add_habit(self, name: Optional[str], category: Optional[str] = None, goal: Any = None) -> Habit:
        clean = (name or "").strip()
        if not clean:
            raise HabitValidationError("Please enter a habit name")
        habit_id = new_habit_id()
        while self._store.get(habit_id) is not None:
            habit_id += 1
        habit = Habit(
            id=habit_id,
            name=clean,
            category=(category or "").strip() or "Other",
            goal=parse_goal(goal, settings.DEFAULT_GOAL),
            streak=0,
            history=[False] * self._store.period.days,
        )
        self._store.habits.append(habit)
        self._store.save()
        logger.info("Added habit %s (%s)", habit.name, habit.id)
        return habit

    def delete_habit(self, habit_id: int) -> bool:
        habit = self._store.get(habit_id)
        if habit is None:
            logger.debug("delete_habit: no habit %s", habit_id)
            return False
        self._store.habits.remove(habit)
        self._store.save()
        logger.info("Deleted habit %s (%s)", habit.name, habit.id)
        return True
