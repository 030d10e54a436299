"""Habit record and the error types shared across the package.

A habit keeps one boolean per day of the tracked period. The ``streak`` field
is a cache of the current run ending at today; it is persisted alongside the
history so the stored blob keeps the same shape the grid has always written.
"""

from __future__ import annotations

import re
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .config import settings

KNOWN_CATEGORIES = ("Health", "Work", "Growth", "Mind")
OTHER_CATEGORY = "Other"
CATEGORY_LABELS = KNOWN_CATEGORIES + (OTHER_CATEGORY,)


class SteadyError(Exception):
    """Base class for habit tracker errors."""


class HabitValidationError(SteadyError, ValueError):
    """Raised when user input cannot become a habit (e.g. a blank name)."""


class HabitDataError(SteadyError):
    """Raised when persisted habit data is corrupt or has the wrong shape."""


def new_habit_id() -> int:
    return int(time.time() * 1000)


def parse_goal(raw: Any, default: int) -> int:
    # Leading integer wins, so "12 days" is 12 and "3.7" is 3.
    match = re.match(r"\s*([+-]?\d+)", str(raw))
    if match is None:
        return default
    goal = int(match.group(1))
    return goal if goal > 0 else default


@dataclass
class Habit:
    id: int
    name: str
    category: str
    goal: int
    streak: int = 0
    history: List[bool] = field(default_factory=list)

    @property
    def completions(self) -> int:
        return sum(1 for done in self.history if done)

    @property
    def bucket(self) -> str:
        return self.category if self.category in KNOWN_CATEGORIES else OTHER_CATEGORY

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Any, *, days: Optional[int] = None) -> "Habit":
        if not isinstance(payload, dict):
            raise HabitDataError(f"habit entry must be an object, got {type(payload).__name__}")
        missing = [key for key in ("id", "name", "history") if key not in payload]
        if missing:
            raise HabitDataError(f"habit entry missing {', '.join(missing)}")
        history = payload.get("history")
        if not isinstance(history, list) or not all(isinstance(item, bool) for item in history):
            raise HabitDataError(f"habit {payload.get('id')!r} has a non-boolean history")
        if days is not None and len(history) != days:
            raise HabitDataError(
                f"habit {payload.get('id')!r} history has {len(history)} days, expected {days}"
            )
        try:
            return cls(
                id=int(payload["id"]),
                name=str(payload["name"]),
                category=str(payload.get("category") or OTHER_CATEGORY),
                goal=parse_goal(payload.get("goal"), settings.DEFAULT_GOAL),
                streak=int(payload.get("streak") or 0),
                history=list(history),
            )
        except (TypeError, ValueError) as exc:
            raise HabitDataError(f"habit {payload.get('id')!r} has invalid fields: {exc}") from exc
