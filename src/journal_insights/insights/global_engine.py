"""Global multi-signal insight generator.

Scans a trader's full journal history and surfaces every behavioral
pattern that clears its threshold, ranked by severity.  Seven signal
families are evaluated independently:

1. Emotion correlation   (negative-emotion warnings, optimal state)
2. Day-of-week           (worst / best weekday)
3. Instrument            (best / worst symbol)
4. Stop-loss discipline  (trades without a stop)
5. Expectancy            (average R-multiple)
6. Streak                (current run at the most recent entry)
7. Overall win rate      (context for everything else)

Each family is a pure function ``(entries, overall_wr, config) -> list``;
the generator concatenates them in that order and applies a stable sort
by severity, so insights of equal severity keep family order.

Usage::

    insights = generate_insights(entries)
    for insight in insights:
        print(insight.severity, insight.title)
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..core.config import GlobalInsightConfig
from ..core.enums import DAY_NAMES, NEGATIVE_EMOTIONS, Emotion, InsightTag, Outcome, Severity
from ..core.models import Insight, JournalEntry
from .base import BaseInsightGenerator, sort_by_severity
from .registry import register_generator
from .stats import avg_r, current_streak, group_by, pct, win_rate

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1. Emotion correlation
# ---------------------------------------------------------------------------

def emotion_insights(
    entries: Sequence[JournalEntry],
    overall_wr: float,
    config: GlobalInsightConfig,
) -> list[Insight]:
    insights: list[Insight] = []
    groups = group_by(entries, lambda e: e.emotion_before)

    for emotion in NEGATIVE_EMOTIONS:
        group = groups.get(emotion)
        if not group or len(group) < config.min_group_size:
            continue
        wr = win_rate(group)
        if overall_wr - wr > config.emotion_gap:
            loss_rate = pct(1 - wr)
            insights.append(Insight(
                id=f"emotion-{emotion.value}",
                severity=Severity.WARNING,
                tag=InsightTag.EMOTION,
                title="Emotional Trading Pattern",
                message=(
                    f"You lose {loss_rate}% of trades when feeling {emotion.value}. "
                    "Consider skipping trades in that emotional state."
                ),
                stat=f"{loss_rate}% loss rate",
                icon="psychology",
            ))

    best_emotion: Emotion | None = None
    best_wr = 0.0
    for emotion, group in groups.items():
        if len(group) < config.min_group_size:
            continue
        wr = win_rate(group)
        if wr > best_wr:
            best_wr = wr
            best_emotion = emotion

    if best_emotion is not None and best_wr > overall_wr + config.best_emotion_margin:
        insights.append(Insight(
            id="emotion-best",
            severity=Severity.SUCCESS,
            tag=InsightTag.EMOTION,
            title="Optimal Trading State",
            message=(
                f"You win {pct(best_wr)}% of trades when {best_emotion.value}. "
                "Try to trade more often in this state."
            ),
            stat=f"{pct(best_wr)}% win rate",
            icon="mood",
        ))

    return insights


# ---------------------------------------------------------------------------
# 2. Day of week
# ---------------------------------------------------------------------------

def day_of_week_insights(
    entries: Sequence[JournalEntry],
    overall_wr: float,
    config: GlobalInsightConfig,
) -> list[Insight]:
    insights: list[Insight] = []
    groups = group_by(entries, lambda e: e.trade_date.weekday())

    for weekday, group in groups.items():
        if len(group) < config.min_group_size:
            continue
        day = DAY_NAMES[weekday]
        wr = win_rate(group)

        if wr < config.day_worst_max_wr and overall_wr - wr > config.day_gap:
            insights.append(Insight(
                id=f"day-worst-{day.lower()}",
                severity=Severity.DANGER,
                tag=InsightTag.TIME,
                title=f"{day} Performance",
                message=(
                    f"Your {day} win rate is {pct(wr)}%. "
                    f"Consider reducing trading on {day}s."
                ),
                stat=f"{pct(wr)}% win rate",
                icon="calendar_today",
            ))

        if wr > overall_wr + config.day_gap and wr > config.day_best_min_wr:
            insights.append(Insight(
                id=f"day-best-{day.lower()}",
                severity=Severity.SUCCESS,
                tag=InsightTag.TIME,
                title=f"{day} is Your Best Day",
                message=(
                    f"You win {pct(wr)}% of trades on {day}s. "
                    f"Consider increasing your {day} activity."
                ),
                stat=f"{pct(wr)}% win rate",
                icon="calendar_today",
            ))

    return insights


# ---------------------------------------------------------------------------
# 3. Instrument
# ---------------------------------------------------------------------------

def instrument_insights(
    entries: Sequence[JournalEntry],
    overall_wr: float,
    config: GlobalInsightConfig,
) -> list[Insight]:
    insights: list[Insight] = []
    groups = group_by(entries, lambda e: e.instrument.upper())

    best, best_wr = "", 0.0
    worst, worst_wr = "", 1.0
    for symbol, group in groups.items():
        if len(group) < config.min_group_size:
            continue
        wr = win_rate(group)
        if wr > best_wr:
            best, best_wr = symbol, wr
        if wr < worst_wr:
            worst, worst_wr = symbol, wr

    if best and best_wr > config.instrument_best_min_wr:
        insights.append(Insight(
            id="instrument-best",
            severity=Severity.SUCCESS,
            tag=InsightTag.INSTRUMENT,
            title="Best Instrument",
            message=(
                f"Your best instrument is {best} ({pct(best_wr)}% win rate). "
                "Consider specializing."
            ),
            stat=f"{pct(best_wr)}% win rate",
            icon="candlestick_chart",
        ))

    if worst and worst_wr < config.instrument_worst_max_wr and worst != best:
        count = len(groups[worst])
        insights.append(Insight(
            id="instrument-worst",
            severity=Severity.DANGER,
            tag=InsightTag.INSTRUMENT,
            title="Underperforming Instrument",
            message=(
                f"You only win {pct(worst_wr)}% on {worst} ({count} trades). "
                "Consider dropping it."
            ),
            stat=f"{pct(worst_wr)}% win rate",
            icon="candlestick_chart",
        ))

    return insights


# ---------------------------------------------------------------------------
# 4. Stop-loss discipline
# ---------------------------------------------------------------------------

def stop_loss_insights(
    entries: Sequence[JournalEntry],
    overall_wr: float,
    config: GlobalInsightConfig,
) -> list[Insight]:
    no_stop = [e for e in entries if not e.has_stop_loss]
    with_stop = [e for e in entries if e.has_stop_loss]

    if len(no_stop) < config.min_no_stop_entries or len(entries) < config.extended_min_entries:
        return []

    no_stop_pct = pct(len(no_stop) / len(entries))
    if no_stop_pct <= config.no_stop_max_pct:
        return []

    avg_loss_no_stop = avg_r(e for e in no_stop if e.outcome == Outcome.LOSS)
    avg_loss_with_stop = avg_r(e for e in with_stop if e.outcome == Outcome.LOSS)

    extra = ""
    if avg_loss_no_stop < avg_loss_with_stop - config.no_stop_r_gap:
        extra = (
            f" Average loss without SL: {avg_loss_no_stop:.1f}R "
            f"vs {avg_loss_with_stop:.1f}R with SL."
        )

    return [Insight(
        id="discipline-sl",
        severity=Severity.WARNING,
        tag=InsightTag.DISCIPLINE,
        title="Missing Stop Losses",
        message=(
            f"You skip stop losses on {no_stop_pct}% of trades.{extra} "
            "Always define your risk before entering."
        ),
        stat=f"{no_stop_pct}% without SL",
        icon="shield",
    )]


# ---------------------------------------------------------------------------
# 5. Expectancy
# ---------------------------------------------------------------------------

def expectancy_insights(
    entries: Sequence[JournalEntry],
    overall_wr: float,
    config: GlobalInsightConfig,
) -> list[Insight]:
    with_r = [e for e in entries if e.r_multiple is not None]
    if len(with_r) < config.min_r_entries:
        return []

    mean_r = avg_r(with_r)
    if mean_r < 0:
        return [Insight(
            id="risk-negative-expectancy",
            severity=Severity.DANGER,
            tag=InsightTag.RISK,
            title="Negative Expectancy",
            message=(
                f"Your average R-multiple is {mean_r:.2f}R. You are losing money "
                "over time. Review your entry criteria and risk management."
            ),
            stat=f"{mean_r:.2f}R avg",
            icon="trending_down",
        )]
    if mean_r > config.positive_edge_min_r:
        return [Insight(
            id="risk-positive-edge",
            severity=Severity.SUCCESS,
            tag=InsightTag.RISK,
            title="Positive Edge Detected",
            message=(
                f"Your average R-multiple is +{mean_r:.2f}R. You have a quantifiable "
                "edge; protect it by staying disciplined."
            ),
            stat=f"+{mean_r:.2f}R avg",
            icon="trending_up",
        )]
    return []


# ---------------------------------------------------------------------------
# 6. Streak
# ---------------------------------------------------------------------------

def streak_insights(
    entries: Sequence[JournalEntry],
    overall_wr: float,
    config: GlobalInsightConfig,
) -> list[Insight]:
    if len(entries) < config.extended_min_entries:
        return []

    streak = current_streak(entries)
    if streak.is_win(config.win_streak_min):
        return [Insight(
            id="streak-win",
            severity=Severity.INFO,
            tag=InsightTag.STREAK,
            title="Winning Streak",
            message=(
                f"You're on a {streak.length}-trade winning streak. Stay focused "
                "and don't let overconfidence creep in."
            ),
            stat=f"{streak.length} wins",
            icon="local_fire_department",
        )]
    if streak.is_loss(config.loss_streak_min):
        return [Insight(
            id="streak-loss",
            severity=Severity.WARNING,
            tag=InsightTag.STREAK,
            title="Losing Streak",
            message=(
                f"You've lost {streak.length} trades in a row. Consider taking a "
                "break to reset mentally before your next trade."
            ),
            stat=f"{streak.length} losses",
            icon="warning",
        )]
    return []


# ---------------------------------------------------------------------------
# 7. Overall win rate
# ---------------------------------------------------------------------------

def overall_win_rate_insights(
    entries: Sequence[JournalEntry],
    overall_wr: float,
    config: GlobalInsightConfig,
) -> list[Insight]:
    if len(entries) < config.extended_min_entries:
        return []

    if overall_wr >= config.good_win_rate:
        return [Insight(
            id="overall-wr-good",
            severity=Severity.SUCCESS,
            tag=InsightTag.PATTERN,
            title="Above-Average Win Rate",
            message=(
                f"Your overall win rate is {pct(overall_wr)}%. You're winning more "
                "than you lose; focus on maximizing R on winners."
            ),
            stat=f"{pct(overall_wr)}%",
            icon="verified",
        )]
    if overall_wr < config.low_win_rate:
        return [Insight(
            id="overall-wr-low",
            severity=Severity.WARNING,
            tag=InsightTag.PATTERN,
            title=f"Win Rate Below {pct(config.low_win_rate)}%",
            message=(
                f"Your win rate is {pct(overall_wr)}%. Review your entry criteria; "
                "you may be taking low-probability setups."
            ),
            stat=f"{pct(overall_wr)}%",
            icon="query_stats",
        )]
    return []


SIGNAL_FAMILIES = (
    emotion_insights,
    day_of_week_insights,
    instrument_insights,
    stop_loss_insights,
    expectancy_insights,
    streak_insights,
    overall_win_rate_insights,
)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

@register_generator("global")
class GlobalInsightGenerator(BaseInsightGenerator):
    """Every qualifying insight over the full history, severity-ranked.

    Parameters
    ----------
    config : GlobalInsightConfig | None
        Thresholds.  Defaults to ``GlobalInsightConfig()``.
    """

    settings_key = "global_insights"

    def __init__(
        self,
        *,
        generator_id: str = "global",
        config: GlobalInsightConfig | None = None,
    ) -> None:
        super().__init__(generator_id, config or GlobalInsightConfig())
        self._cfg: GlobalInsightConfig = self._config

    def generate(self, entries: Sequence[JournalEntry]) -> list[Insight]:
        if len(entries) < self._cfg.min_entries:
            return []

        overall_wr = win_rate(entries)
        insights: list[Insight] = []
        for family in SIGNAL_FAMILIES:
            insights.extend(family(entries, overall_wr, self._cfg))

        logger.debug(
            "Generated %d insights from %d entries (overall win rate %.2f)",
            len(insights),
            len(entries),
            overall_wr,
        )
        return sort_by_severity(insights)


def generate_insights(
    entries: Sequence[JournalEntry],
    config: GlobalInsightConfig | None = None,
) -> list[Insight]:
    """Convenience wrapper around ``GlobalInsightGenerator.generate``."""
    return GlobalInsightGenerator(config=config).generate(entries)
