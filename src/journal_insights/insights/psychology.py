"""Psychology correlation analysis.

Relates the pre-trade mindset a trader records (a 1-5 readiness score
and a set of mental-state tags) to how the trade turned out.  Answers
questions like "Do I win more when I rate myself 4 or 5?" or "What does
trading while tagged FOMO cost me?"

Four outputs:

- readiness buckets: win rate and average R per readiness level
- tag impact: win rate with vs without each tag
- readiness trend: readiness over time, for charting
- combined pattern: best / worst readiness-range x tag combination

Win rates in this module are percentages (0-100), not fractions, and
use all closed trades (breakeven included) as the denominator.

Usage::

    report = PsychologyAnalyser().analyse(entries)
    if report.worst_tag:
        print(report.worst_tag.tag, report.worst_tag.impact)
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Sequence

from ..core.config import PsychologyConfig
from ..core.enums import Outcome
from ..core.models import JournalEntry, PreTradeMindset
from .stats import avg_r

logger = logging.getLogger(__name__)

READINESS_LEVELS = (1, 2, 3, 4, 5)

# (label, min, max) inclusive; evaluation order matters for tie-breaks
READINESS_RANGES = (
    ("4-5", 4, 5),
    ("1-2", 1, 2),
    ("3", 3, 3),
)


@dataclass(frozen=True)
class ReadinessBucket:
    level: int
    total: int
    wins: int
    win_rate: float
    avg_r: float


@dataclass(frozen=True)
class ReadinessInsight:
    """High (4-5) vs low (1-2) readiness comparison."""

    high_win_rate: float
    low_win_rate: float
    high_total: int
    low_total: int

    @property
    def total(self) -> int:
        return self.high_total + self.low_total


@dataclass(frozen=True)
class TagImpact:
    tag: str
    count_with: int
    count_without: int
    total_closed: int
    win_rate_with: float
    win_rate_without: float
    avg_r_with: float
    avg_r_without: float
    impact: float  # win_rate_with - win_rate_without, percentage points


@dataclass(frozen=True)
class TrendPoint:
    date: date
    readiness: int
    outcome: Outcome | None


@dataclass(frozen=True)
class ComboResult:
    readiness_range: str
    tag: str
    win_rate: float
    count: int


@dataclass(frozen=True)
class CombinedInsight:
    best: ComboResult | None = None
    worst: ComboResult | None = None


@dataclass(frozen=True)
class PsychologyReport:
    has_mindset_data: bool
    readiness_stats: list[ReadinessBucket] = field(default_factory=list)
    readiness_insight: ReadinessInsight | None = None
    tag_stats: list[TagImpact] = field(default_factory=list)
    worst_tag: TagImpact | None = None
    readiness_trend: list[TrendPoint] = field(default_factory=list)
    trend_is_meaningful: bool = False
    combined_insight: CombinedInsight | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _wins(entries: Sequence[JournalEntry]) -> int:
    return sum(1 for e in entries if e.outcome == Outcome.WIN)


def _rate(wins: int, total: int) -> float:
    return wins / total * 100 if total > 0 else 0.0


def _tags(entry: JournalEntry) -> frozenset[str]:
    mindset: PreTradeMindset | None = entry.pre_trade_mindset
    return mindset.tags if mindset is not None else frozenset()


class PsychologyAnalyser:
    """Mindset vs outcome correlation analyser.

    Parameters
    ----------
    config : PsychologyConfig | None
        Tag vocabulary and thresholds.  Defaults to ``PsychologyConfig()``.
    """

    def __init__(self, *, config: PsychologyConfig | None = None) -> None:
        self._cfg = config or PsychologyConfig()

    def analyse(self, entries: Sequence[JournalEntry]) -> PsychologyReport:
        """Build the full psychology report.  Open trades are ignored."""
        closed = [e for e in entries if e.outcome is not None]
        with_mindset = [e for e in closed if e.pre_trade_mindset is not None]
        with_readiness = [e for e in with_mindset if e.readiness is not None]

        readiness_stats = self.readiness_stats(with_readiness)
        tag_stats = self.tag_stats(with_mindset)
        trend = self.readiness_trend(with_readiness)

        report = PsychologyReport(
            has_mindset_data=bool(with_mindset),
            readiness_stats=readiness_stats,
            readiness_insight=self.readiness_insight(readiness_stats),
            tag_stats=tag_stats,
            worst_tag=self.worst_tag(tag_stats),
            readiness_trend=trend,
            trend_is_meaningful=len(trend) >= self._cfg.min_trend_points,
            combined_insight=self.combined_insight(with_readiness),
        )
        logger.debug(
            "Psychology report: %d closed, %d with mindset, %d tags reported",
            len(closed),
            len(with_mindset),
            len(tag_stats),
        )
        return report

    # ------------------------------------------------------------------ #
    # Readiness                                                            #
    # ------------------------------------------------------------------ #

    def readiness_stats(self, entries: Sequence[JournalEntry]) -> list[ReadinessBucket]:
        buckets = []
        for level in READINESS_LEVELS:
            group = [e for e in entries if e.readiness == level]
            wins = _wins(group)
            buckets.append(ReadinessBucket(
                level=level,
                total=len(group),
                wins=wins,
                win_rate=_rate(wins, len(group)),
                avg_r=avg_r(group),
            ))
        return buckets

    def readiness_insight(
        self, buckets: Sequence[ReadinessBucket]
    ) -> ReadinessInsight | None:
        hi_min, hi_max = self._cfg.high_readiness
        lo_min, lo_max = self._cfg.low_readiness
        high = [b for b in buckets if hi_min <= b.level <= hi_max]
        low = [b for b in buckets if lo_min <= b.level <= lo_max]

        high_total = sum(b.total for b in high)
        low_total = sum(b.total for b in low)
        if high_total == 0 or low_total == 0:
            return None

        return ReadinessInsight(
            high_win_rate=_rate(sum(b.wins for b in high), high_total),
            low_win_rate=_rate(sum(b.wins for b in low), low_total),
            high_total=high_total,
            low_total=low_total,
        )

    def readiness_trend(self, entries: Sequence[JournalEntry]) -> list[TrendPoint]:
        points = [
            TrendPoint(date=e.trade_date, readiness=e.readiness, outcome=e.outcome)
            for e in entries
            if e.readiness is not None
        ]
        return sorted(points, key=lambda p: p.date)

    # ------------------------------------------------------------------ #
    # Tags                                                                 #
    # ------------------------------------------------------------------ #

    def tag_stats(self, entries: Sequence[JournalEntry]) -> list[TagImpact]:
        results = []
        for tag in self._cfg.tags:
            with_tag = [e for e in entries if tag in _tags(e)]
            if not with_tag:
                continue
            without_tag = [e for e in entries if tag not in _tags(e)]

            rate_with = _rate(_wins(with_tag), len(with_tag))
            rate_without = _rate(_wins(without_tag), len(without_tag))
            results.append(TagImpact(
                tag=tag,
                count_with=len(with_tag),
                count_without=len(without_tag),
                total_closed=len(entries),
                win_rate_with=rate_with,
                win_rate_without=rate_without,
                avg_r_with=avg_r(with_tag),
                avg_r_without=avg_r(without_tag),
                impact=rate_with - rate_without,
            ))
        return results

    def worst_tag(self, tag_stats: Sequence[TagImpact]) -> TagImpact | None:
        """Most damaging tag, if it costs enough and has been seen enough."""
        worst: TagImpact | None = None
        for stat in tag_stats:
            if worst is None or stat.impact < worst.impact:
                worst = stat
        if (
            worst is not None
            and worst.impact < self._cfg.worst_tag_max_impact
            and worst.count_with >= self._cfg.worst_tag_min_count
        ):
            return worst
        return None

    # ------------------------------------------------------------------ #
    # Combined readiness x tag                                             #
    # ------------------------------------------------------------------ #

    def combined_insight(self, entries: Sequence[JournalEntry]) -> CombinedInsight | None:
        cfg = self._cfg
        if len(entries) < cfg.combined_min_entries:
            return None

        best = ComboResult(readiness_range="", tag="", win_rate=0.0, count=0)
        worst = ComboResult(readiness_range="", tag="", win_rate=100.0, count=0)

        for label, lo, hi in READINESS_RANGES:
            for tag in cfg.tags:
                matching = [
                    e for e in entries
                    if lo <= e.readiness <= hi and tag in _tags(e)
                ]
                if len(matching) < cfg.combined_min_matches:
                    continue

                rate = _rate(_wins(matching), len(matching))
                combo = ComboResult(
                    readiness_range=label, tag=tag, win_rate=rate, count=len(matching)
                )
                if rate > best.win_rate or (rate == best.win_rate and combo.count > best.count):
                    best = combo
                if rate < worst.win_rate or (rate == worst.win_rate and combo.count > worst.count):
                    worst = combo

        return CombinedInsight(
            best=best if best.count >= cfg.combined_min_matches else None,
            worst=worst if worst.count >= cfg.combined_min_matches else None,
        )


def analyse_psychology(
    entries: Sequence[JournalEntry],
    config: PsychologyConfig | None = None,
) -> PsychologyReport:
    """Convenience wrapper around ``PsychologyAnalyser.analyse``."""
    return PsychologyAnalyser(config=config).analyse(entries)
