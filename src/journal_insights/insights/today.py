"""Today-context selector.

Picks at most one short nudge relevant to the current calendar day:
first a day-of-week effect for today's weekday, then an active streak.
Its streak bounds differ from the global generator (a win
streak must reach 5 here, 3 there); see ``TodayInsightConfig``.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..core.clock import IClock, LocalClock
from ..core.config import TodayInsightConfig
from ..core.enums import DAY_NAMES, InsightTag, Severity
from ..core.models import Insight, JournalEntry
from .base import BaseInsightGenerator
from .registry import register_generator
from .stats import current_streak, pct, win_rate

logger = logging.getLogger(__name__)


@register_generator("today")
class TodayInsightSelector(BaseInsightGenerator):
    """Single most relevant insight for today.

    Parameters
    ----------
    config : TodayInsightConfig | None
        Thresholds.  Defaults to ``TodayInsightConfig()``.
    clock : IClock | None
        Source of "today".  Defaults to the local calendar date.
    """

    settings_key = "today"

    def __init__(
        self,
        *,
        generator_id: str = "today",
        config: TodayInsightConfig | None = None,
        clock: IClock | None = None,
    ) -> None:
        super().__init__(generator_id, config or TodayInsightConfig())
        self._cfg: TodayInsightConfig = self._config
        self._clock = clock or LocalClock()

    def select(
        self,
        entries: Sequence[JournalEntry],
        today: date | None = None,
    ) -> Insight | None:
        """Return the day-of-week or streak insight for today, if any.

        ``entries`` is all history up to and including today, oldest first.
        """
        cfg = self._cfg
        if len(entries) < cfg.min_entries:
            return None

        today = today or self._clock.today()
        weekday = today.weekday()
        day = DAY_NAMES[weekday]

        todays = [e for e in entries if e.trade_date.weekday() == weekday]
        if len(todays) >= cfg.min_day_entries:
            day_wr = win_rate(todays)
            overall_wr = win_rate(entries)

            if day_wr < cfg.day_worst_max_wr and overall_wr - day_wr > cfg.day_gap:
                return Insight(
                    id="pulse-day-warning",
                    severity=Severity.WARNING,
                    tag=InsightTag.TIME,
                    title=f"{day} Alert",
                    message=f"Heads up: You tend to lose on {day}s ({pct(day_wr)}% win rate).",
                    icon="warning",
                )

            if day_wr > overall_wr + cfg.day_gap and day_wr > cfg.day_best_min_wr:
                return Insight(
                    id="pulse-day-good",
                    severity=Severity.SUCCESS,
                    tag=InsightTag.TIME,
                    title=f"{day} Edge",
                    message=f"{day}s are your best day ({pct(day_wr)}% win rate). Look for setups.",
                    icon="trending_up",
                )

        streak = current_streak(entries)
        if streak.is_loss(cfg.loss_streak_min):
            return Insight(
                id="pulse-streak-loss",
                severity=Severity.WARNING,
                tag=InsightTag.STREAK,
                title="Losing Streak",
                message=(
                    f"{streak.length} losses in a row. Consider taking a mental "
                    "reset before trading today."
                ),
                icon="pause_circle",
            )
        if streak.is_win(cfg.win_streak_min):
            return Insight(
                id="pulse-streak-win",
                severity=Severity.INFO,
                tag=InsightTag.STREAK,
                title="Hot Streak",
                message=(
                    f"{streak.length} wins in a row. Stay disciplined and stick "
                    "to your rules."
                ),
                icon="local_fire_department",
            )

        logger.debug("No today insight for %s (%d entries)", day, len(entries))
        return None

    def generate(self, entries: Sequence[JournalEntry]) -> list[Insight]:
        insight = self.select(entries)
        return [insight] if insight is not None else []


def get_today_insight(
    entries: Sequence[JournalEntry],
    today: date | None = None,
    config: TodayInsightConfig | None = None,
) -> Insight | None:
    """Convenience wrapper around ``TodayInsightSelector.select``."""
    return TodayInsightSelector(config=config).select(entries, today=today)
