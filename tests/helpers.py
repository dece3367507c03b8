"""Entry builders shared by unit and property tests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from journal_insights.core.models import JournalEntry, PreTradeMindset

# 2024-01-01 was a Monday.
BASE_DATE = date(2024, 1, 1)


def make_entry(
    outcome: str | None = "win",
    *,
    instrument: str = "EURUSD",
    trade_date: date | None = None,
    emotion: str = "neutral",
    r_multiple: float | None = None,
    stop_loss: float | None = 1.0,
    readiness: int | None = None,
    tags: Iterable[str] | None = None,
    pnl: float | None = None,
    direction: str = "long",
) -> JournalEntry:
    """Build a JournalEntry with sensible defaults (stop defined, neutral)."""
    mindset = None
    if readiness is not None or tags is not None:
        mindset = PreTradeMindset(readiness=readiness, tags=frozenset(tags or ()))
    return JournalEntry(
        instrument=instrument,
        trade_date=trade_date or BASE_DATE,
        direction=direction,
        outcome=outcome,
        emotion_before=emotion,
        r_multiple=r_multiple,
        pnl=pnl,
        stop_loss=stop_loss,
        pre_trade_mindset=mindset,
    )


def make_series(
    outcomes: Iterable[str | None],
    *,
    start: date = BASE_DATE,
    **kwargs,
) -> list[JournalEntry]:
    """One entry per consecutive calendar day, oldest first."""
    return [
        make_entry(outcome, trade_date=start + timedelta(days=i), **kwargs)
        for i, outcome in enumerate(outcomes)
    ]


def ids(insights) -> list[str]:
    return [i.id for i in insights]
