"""Action entry points used by the console view.

Each function takes a loose ``params`` dict (whatever the command parser
pulled out of the user's input) and returns a dictionary with an ``ok`` flag,
a ``say`` line for the user, and optional structured data. Validation and
not-found cases come back as ``ok=False`` rather than exceptions.

State lives in ``<STATE_DIR>/storage.json``; ``STEADY_STATE_DIR`` overrides the
directory, which is how the tests isolate themselves.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

from .config import settings
from .models import CATEGORY_LABELS, HabitValidationError
from .mutator import HabitMutator
from .period import Period
from .stats import StatsAggregator
from .storage import STORAGE_FILENAME, LocalStorage
from .store import HabitStore, ThemePreference

STATE_DIR_ENV = "STEADY_STATE_DIR"
STATE_DIR = Path(os.environ.get(STATE_DIR_ENV) or settings.STATE_DIR)
STORAGE_PATH = STATE_DIR / STORAGE_FILENAME

_STORAGE = LocalStorage(STORAGE_PATH)
_STORE = HabitStore(_STORAGE, Period())
_MUTATOR = HabitMutator(_STORE)
_STATS = StatsAggregator(_STORE.habits, _STORE.period)
_THEME = ThemePreference(_STORE.storage)


def _int_param(params: Dict[str, Any], *keys: str) -> Optional[int]:
    for key in keys:
        value = params.get(key)
        if value is None or value == "":
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
    return None


def get_store() -> HabitStore:
    return _STORE


def get_stats() -> StatsAggregator:
    return _STATS


def get_theme() -> ThemePreference:
    return _THEME


def habit_list_action(params: Dict[str, Any]) -> Dict[str, Any]:
    habits = _STORE.habits
    if not habits:
        return {"ok": True, "say": "No habits tracked yet.", "habits": []}
    lines = []
    for habit in habits:
        done, goal, _ = _STATS.goal_progress(habit)
        lines.append(f"[{habit.id}] {habit.name} ({habit.category}) {done}/{goal}, {habit.streak} day streak")
    return {"ok": True, "say": " | ".join(lines), "habits": [h.to_dict() for h in habits]}


def habit_toggle_action(params: Dict[str, Any]) -> Dict[str, Any]:
    habit_id = _int_param(params, "id", "habit_id")
    day = _int_param(params, "day")
    if habit_id is None or day is None:
        return {"ok": False, "say": "Which habit and day should I toggle?"}
    # Days are 1-based for the user, 0-based in the history.
    if not _MUTATOR.toggle_day(habit_id, day - 1):
        return {"ok": False, "say": f"No cell for habit {habit_id} on day {day}."}
    habit = _STORE.get(habit_id)
    state = "done" if habit.history[day - 1] else "not done"
    return {
        "ok": True,
        "say": f"{habit.name} day {day} marked {state}. Streak is {habit.streak} days.",
        "habit": habit.to_dict(),
    }


def habit_add_action(params: Dict[str, Any]) -> Dict[str, Any]:
    try:
        habit = _MUTATOR.add_habit(params.get("name"), params.get("category"), params.get("goal"))
    except HabitValidationError as exc:
        return {"ok": False, "say": str(exc)}
    return {
        "ok": True,
        "say": f"Tracking habit {habit.name}, target {habit.goal} days.",
        "habit": habit.to_dict(),
    }


def habit_delete_action(params: Dict[str, Any]) -> Dict[str, Any]:
    habit_id = _int_param(params, "id", "habit_id")
    if habit_id is None:
        return {"ok": False, "say": "Which habit should I delete?"}
    habit = _STORE.get(habit_id)
    if habit is None or not _MUTATOR.delete_habit(habit_id):
        return {"ok": False, "say": f"No habit with id {habit_id}."}
    return {"ok": True, "say": f"Deleted habit {habit.name}."}


def habit_stats_action(params: Dict[str, Any]) -> Dict[str, Any]:
    summary = _STATS.summary()
    categories = ", ".join(f"{label} {summary['categories'][label]}" for label in CATEGORY_LABELS)
    say = (
        f"{summary['global_progress']}% overall, "
        f"{summary['completed_today']}/{summary['total_habits']} done today, "
        f"best streak {summary['best_streak']}. {categories}."
    )
    return {"ok": True, "say": say, "stats": summary, "daily": _STATS.progress_series()}


def theme_toggle_action(params: Dict[str, Any]) -> Dict[str, Any]:
    theme = _THEME.toggle()
    return {"ok": True, "say": f"Switched to {theme} theme.", "theme": theme}


__all__ = [
    "habit_list_action",
    "habit_toggle_action",
    "habit_add_action",
    "habit_delete_action",
    "habit_stats_action",
    "theme_toggle_action",
]
