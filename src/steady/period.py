"""The tracked window of days and where "today" falls inside it."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from .config import settings


class Period:
    def __init__(self, days: Optional[int] = None, today: Optional[date] = None):
        self.days = int(days or settings.DAYS_IN_PERIOD)
        self.today = today or date.today()

    @property
    def today_index(self) -> int:
        # Days past the end of the period collapse onto the last slot.
        return max(0, min(self.today.day - 1, self.days - 1))

    def is_today(self, index: int) -> bool:
        return index == self.today_index

    def day_numbers(self) -> List[int]:
        return list(range(1, self.days + 1))

    def label(self) -> str:
        return f"{self.today.strftime('%A')}, {self.today.strftime('%B')} {self.today.day}, {self.today.year}"
