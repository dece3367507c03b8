"""Statistics primitives shared by every insight generator.

All helpers are pure and total: they accept any sequence of entries,
including the empty one, and never raise on missing optional fields.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Callable, Hashable, Iterable, Sequence, TypeVar

from ..core.enums import Outcome
from ..core.models import JournalEntry

K = TypeVar("K", bound=Hashable)


def decided(entries: Iterable[JournalEntry]) -> list[JournalEntry]:
    """Entries whose outcome is a win or a loss."""
    return [e for e in entries if e.is_decided]


def win_rate(entries: Iterable[JournalEntry]) -> float:
    """Wins / decided trades.  0.0 when nothing is decided."""
    closed = decided(entries)
    if not closed:
        return 0.0
    wins = sum(1 for e in closed if e.outcome == Outcome.WIN)
    return wins / len(closed)


def avg_r(entries: Iterable[JournalEntry]) -> float:
    """Mean R-multiple over entries that carry one.  0.0 when none do."""
    values = [e.r_multiple for e in entries if e.r_multiple is not None]
    if not values:
        return 0.0
    return sum(values) / len(values)


def group_by(
    entries: Iterable[JournalEntry],
    key: Callable[[JournalEntry], K],
) -> dict[K, list[JournalEntry]]:
    """Partition entries by key, keeping first-seen key order."""
    groups: dict[K, list[JournalEntry]] = {}
    for e in entries:
        groups.setdefault(key(e), []).append(e)
    return groups


def pct(value: float) -> int:
    """Fraction to a whole percent, rounding halves up."""
    return math.floor(value * 100 + 0.5)


# ---------------------------------------------------------------------------
# Streaks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Streak:
    """A run of identical decided outcomes."""

    outcome: Outcome | None = None
    length: int = 0
    start: date | None = None
    end: date | None = None

    def is_win(self, minimum: int) -> bool:
        return self.outcome == Outcome.WIN and self.length >= minimum

    def is_loss(self, minimum: int) -> bool:
        return self.outcome == Outcome.LOSS and self.length >= minimum


def current_streak(entries: Sequence[JournalEntry]) -> Streak:
    """Run of identical outcomes ending at the most recent (last) entry.

    Scans backward; a breakeven or missing outcome ends the scan
    immediately and is never part of a streak.
    """
    outcome: Outcome | None = None
    length = 0
    for e in reversed(entries):
        if not e.is_decided:
            break
        if outcome is None:
            outcome = e.outcome
            length = 1
        elif e.outcome == outcome:
            length += 1
        else:
            break
    return Streak(outcome=outcome, length=length)


def longest_streak(entries: Iterable[JournalEntry]) -> Streak:
    """Longest run of identical outcomes in trade-date order.

    Entries are stably sorted by ``trade_date``; a breakeven or missing
    outcome resets the run.  Ties keep the earliest run.
    """
    best = Streak()
    run_outcome: Outcome | None = None
    run_length = 0
    run_start: date | None = None

    for e in sorted(entries, key=lambda x: x.trade_date):
        if not e.is_decided:
            run_outcome = None
            run_length = 0
            continue
        if e.outcome == run_outcome:
            run_length += 1
        else:
            run_outcome = e.outcome
            run_length = 1
            run_start = e.trade_date
        if run_length > best.length:
            best = Streak(
                outcome=run_outcome,
                length=run_length,
                start=run_start,
                end=e.trade_date,
            )
    return best
