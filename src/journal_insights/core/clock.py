"""Clock abstraction for "today"-relative insights.

LocalClock: the caller's local calendar date
FixedClock: a pinned date for tests and replays

Generators never call date.today() directly.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol


class IClock(Protocol):
    """Clock interface used by date-dependent code."""

    def today(self) -> date:
        """Current calendar date."""
        ...


class LocalClock:
    """Real local calendar date."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to a single date."""

    def __init__(self, day: date) -> None:
        self._day = day

    def today(self) -> date:
        return self._day

    def set_date(self, day: date) -> None:
        self._day = day
