"""Owner of the live habit collection and its persistence.

The store loads once at construction (persisted habits, or a demo set on the
very first run) and writes the whole collection back on every ``save``.
Corrupt or incompatible data never reaches the caller: it is logged and the
demo set is used instead.
"""

from __future__ import annotations

import json
import logging
import random
import threading
from typing import Iterable, List, Optional

from .config import settings
from .models import Habit, HabitDataError
from .period import Period
from .storage import LocalStorage
from .streaks import refresh_streak

logger = logging.getLogger(__name__)

STORAGE_KEY = "steady_habits_data"
THEME_KEY = "steady_theme"

SEED_HABITS = (
    (1, "Morning Workout", "Health", 20),
    (2, "Reading (30 mins)", "Growth", 15),
    (3, "Drink 2L Water", "Health", 30),
    (4, "Code Project", "Work", 25),
    (5, "Meditation", "Mind", 28),
)


def _seed_rng(seed: Optional[str]) -> random.Random:
    if seed:
        try:
            return random.Random(int(seed))
        except ValueError:
            return random.Random(seed)
    return random.Random()


def seed_habits(period: Period, seed: Optional[str] = None) -> List[Habit]:
    rng = _seed_rng(seed if seed is not None else settings.SEED)
    habits: List[Habit] = []
    for habit_id, name, category, goal in SEED_HABITS:
        history = [rng.random() > 0.4 for _ in range(period.days)]
        habit = Habit(id=habit_id, name=name, category=category, goal=goal, history=history)
        refresh_streak(habit, period.today_index)
        habits.append(habit)
    return habits


def parse_habits(raw: str, days: int) -> List[Habit]:
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise HabitDataError(f"stored habits are not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise HabitDataError(f"stored habits must be an array, got {type(payload).__name__}")
    habits = [Habit.from_dict(entry, days=days) for entry in payload]
    ids = [habit.id for habit in habits]
    if len(set(ids)) != len(ids):
        raise HabitDataError("stored habits contain duplicate ids")
    return habits


class HabitStore:
    def __init__(self, storage: LocalStorage, period: Optional[Period] = None):
        self._storage = storage
        self._lock = threading.RLock()
        self.period = period or Period()
        self.habits: List[Habit] = self.load()

    @property
    def storage(self) -> LocalStorage:
        return self._storage

    def load(self) -> List[Habit]:
        raw = self._storage.get_item(STORAGE_KEY)
        if raw is None:
            logger.info("No saved habits, starting from the demo set")
            return seed_habits(self.period)
        try:
            habits = parse_habits(raw, self.period.days)
        except HabitDataError as exc:
            logger.warning("Discarding saved habits: %s", exc)
            return seed_habits(self.period)
        logger.debug("Loaded %d habits", len(habits))
        return habits

    def save(self, habits: Optional[Iterable[Habit]] = None) -> None:
        with self._lock:
            items = list(self.habits if habits is None else habits)
            payload = json.dumps([habit.to_dict() for habit in items])
            self._storage.set_item(STORAGE_KEY, payload)
            logger.debug("Saved %d habits", len(items))

    def get(self, habit_id: int) -> Optional[Habit]:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None


class ThemePreference:
    def __init__(self, storage: LocalStorage):
        self._storage = storage

    def is_dark(self) -> bool:
        return self._storage.get_item(THEME_KEY) == "dark"

    def set_dark(self, dark: bool) -> None:
        self._storage.set_item(THEME_KEY, "dark" if dark else "light")

    def toggle(self) -> str:
        dark = not self.is_dark()
        self.set_dark(dark)
        return "dark" if dark else "light"
