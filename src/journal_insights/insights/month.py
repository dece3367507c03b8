"""Calendar-month summary generator.

Produces the single best talking point for one month of trading.  The
caller pre-filters entries to the month.  Unlike the global generator
this is a fixed priority cascade that stops at the first match:

1. Negative-emotion pattern
2. Longest same-outcome streak within the month
3. Best weekday
4. Instrument concentration
5. Fallback: the month's win rate
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from ..core.config import MonthInsightConfig
from ..core.enums import DAY_NAMES, NEGATIVE_EMOTIONS, InsightTag, Outcome, Severity
from ..core.models import Insight, JournalEntry
from .base import BaseInsightGenerator
from .registry import register_generator
from .stats import decided, group_by, longest_streak, pct, win_rate

logger = logging.getLogger(__name__)


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


@register_generator("month")
class MonthSummaryGenerator(BaseInsightGenerator):
    """At most one insight summarising a calendar month.

    Parameters
    ----------
    config : MonthInsightConfig | None
        Thresholds.  Defaults to ``MonthInsightConfig()``.
    """

    settings_key = "month"

    def __init__(
        self,
        *,
        generator_id: str = "month",
        config: MonthInsightConfig | None = None,
    ) -> None:
        super().__init__(generator_id, config or MonthInsightConfig())
        self._cfg: MonthInsightConfig = self._config

    def summarise(self, entries: Sequence[JournalEntry]) -> Insight | None:
        """Return the month's headline insight, or None."""
        cfg = self._cfg
        total = len(entries)

        if total == 0:
            return Insight(
                id="month-empty",
                severity=Severity.INFO,
                tag=InsightTag.PATTERN,
                title="No Trades",
                message="No trades this month yet.",
                icon="calendar_today",
            )
        if total < cfg.min_entries:
            plural = "" if total == 1 else "s"
            return Insight(
                id="month-insufficient",
                severity=Severity.INFO,
                tag=InsightTag.PATTERN,
                title="Small Sample",
                message=f"Only {total} trade{plural} this month. Consistency builds edge.",
                stat=f"{total} trade{plural}",
                icon="info",
            )

        overall_wr = win_rate(entries)

        for step in (
            self._emotion_pattern,
            self._streak,
            self._best_weekday,
            self._instrument_focus,
            self._win_rate,
        ):
            insight = step(entries, overall_wr)
            if insight is not None:
                logger.debug("Month insight %s from %d entries", insight.id, total)
                return insight
        return None

    def generate(self, entries: Sequence[JournalEntry]) -> list[Insight]:
        insight = self.summarise(entries)
        return [insight] if insight is not None else []

    # ------------------------------------------------------------------ #
    # Cascade steps                                                        #
    # ------------------------------------------------------------------ #

    def _emotion_pattern(
        self, entries: Sequence[JournalEntry], overall_wr: float
    ) -> Insight | None:
        groups = group_by(
            (e for e in entries if e.emotion_before in NEGATIVE_EMOTIONS),
            lambda e: e.emotion_before,
        )
        for emotion, group in groups.items():
            if len(group) < self._cfg.min_group_size:
                continue
            diff = overall_wr - win_rate(group)
            if diff > self._cfg.emotion_gap:
                name = emotion.value
                return Insight(
                    id=f"month-emotion-{name}",
                    severity=Severity.WARNING,
                    tag=InsightTag.EMOTION,
                    title="Emotional Pattern",
                    message=(
                        f"You've taken {len(group)} trades feeling {name} this month; "
                        f"your win rate drops {pct(diff)}% when {name}."
                    ),
                    stat=f"-{pct(diff)}% win rate",
                    icon="psychology",
                )
        return None

    def _streak(
        self, entries: Sequence[JournalEntry], overall_wr: float
    ) -> Insight | None:
        streak = longest_streak(entries)
        if streak.length < self._cfg.min_streak or streak.outcome is None:
            return None

        is_win = streak.outcome == Outcome.WIN
        kind = streak.outcome.value
        start = _ordinal(streak.start.day)
        end = _ordinal(streak.end.day)
        return Insight(
            id=f"month-streak-{kind}",
            severity=Severity.INFO if is_win else Severity.WARNING,
            tag=InsightTag.STREAK,
            title="Winning Run" if is_win else "Losing Run",
            message=f"You hit a {streak.length}-{kind} streak around the {start} to {end}.",
            stat=f"{streak.length} {kind}s" if is_win else f"{streak.length} losses",
            icon="local_fire_department" if is_win else "warning",
        )

    def _best_weekday(
        self, entries: Sequence[JournalEntry], overall_wr: float
    ) -> Insight | None:
        groups = group_by(entries, lambda e: e.trade_date.weekday())

        best_day = -1
        best_wr = 0.0
        for weekday, group in groups.items():
            if len(group) < self._cfg.min_group_size:
                continue
            # share of all trades that day, open and breakeven included
            wr = sum(1 for e in group if e.outcome == Outcome.WIN) / len(group)
            if wr > best_wr:
                best_wr = wr
                best_day = weekday

        if best_day >= 0 and best_wr > overall_wr + self._cfg.best_day_margin:
            day = DAY_NAMES[best_day]
            return Insight(
                id="month-best-day",
                severity=Severity.SUCCESS,
                tag=InsightTag.TIME,
                title=f"{day} is Working",
                message=f"Your best day is {day} with a {pct(best_wr)}% win rate.",
                stat=f"{pct(best_wr)}% win rate",
                icon="calendar_today",
            )
        return None

    def _instrument_focus(
        self, entries: Sequence[JournalEntry], overall_wr: float
    ) -> Insight | None:
        total = len(entries)
        counts = Counter(e.instrument.upper() for e in entries)
        symbol, count = counts.most_common(1)[0]
        if count >= total * self._cfg.instrument_share and total >= self._cfg.min_group_size:
            return Insight(
                id="month-instrument-focus",
                severity=Severity.INFO,
                tag=InsightTag.INSTRUMENT,
                title="Instrument Focus",
                message=f"{count} of your {total} trades were {symbol}.",
                stat=f"{pct(count / total)}% {symbol}",
                icon="candlestick_chart",
            )
        return None

    def _win_rate(
        self, entries: Sequence[JournalEntry], overall_wr: float
    ) -> Insight | None:
        if len(decided(entries)) < self._cfg.min_decided:
            return None
        return Insight(
            id="month-win-rate",
            severity=Severity.INFO,
            tag=InsightTag.PATTERN,
            title="Monthly Win Rate",
            message=(
                f"Your win rate this month is {pct(overall_wr)}% "
                f"across {len(entries)} trades."
            ),
            stat=f"{pct(overall_wr)}%",
            icon="query_stats",
        )


def entries_in_month(
    entries: Sequence[JournalEntry], year: int, month: int
) -> list[JournalEntry]:
    """Entries whose trade date falls in the given calendar month."""
    return [
        e for e in entries
        if e.trade_date.year == year and e.trade_date.month == month
    ]


def generate_month_insight(
    entries: Sequence[JournalEntry],
    config: MonthInsightConfig | None = None,
) -> Insight | None:
    """Convenience wrapper around ``MonthSummaryGenerator.summarise``."""
    return MonthSummaryGenerator(config=config).summarise(entries)
