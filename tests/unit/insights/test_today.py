"""Tests for TodayInsightSelector."""

from datetime import date

from journal_insights.core.config import TodayInsightConfig
from journal_insights.core.enums import Severity
from journal_insights.insights.today import TodayInsightSelector, get_today_insight

from helpers import make_entry, make_series

MONDAY = date(2024, 1, 29)


def _mondays(*outcomes):
    days = [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15), date(2024, 1, 22)]
    return [make_entry(o, trade_date=d) for o, d in zip(outcomes, days)]


class TestDayOfWeek:
    def test_losing_weekday_warns(self):
        entries = sorted(
            _mondays("loss", "loss", "loss")
            + make_series(["win"] * 4, start=date(2024, 1, 2)),
            key=lambda e: e.trade_date,
        )
        insight = get_today_insight(entries, today=MONDAY)
        assert insight is not None
        assert insight.id == "pulse-day-warning"
        assert insight.severity == Severity.WARNING
        assert insight.title == "Monday Alert"
        assert "(0% win rate)" in insight.message

    def test_winning_weekday(self):
        entries = sorted(
            _mondays("win", "win", "win")
            + make_series(["win", "win", "loss", "loss", "loss"], start=date(2024, 1, 2)),
            key=lambda e: e.trade_date,
        )
        insight = get_today_insight(entries, today=MONDAY)
        assert insight.id == "pulse-day-good"
        assert insight.severity == Severity.SUCCESS
        assert insight.title == "Monday Edge"

    def test_day_signal_beats_streak(self):
        entries = sorted(
            make_series(["win"] * 4, start=date(2024, 1, 2))
            + _mondays(None, "loss", "loss", "loss")[1:],
            key=lambda e: e.trade_date,
        )
        insight = get_today_insight(entries, today=MONDAY)
        assert insight.id == "pulse-day-warning"

    def test_other_weekday_not_considered(self):
        entries = sorted(
            _mondays("loss", "loss", "loss")
            + make_series(["win"] * 4, start=date(2024, 1, 2)),
            key=lambda e: e.trade_date,
        )
        # Tuesday only has one entry
        assert get_today_insight(entries, today=date(2024, 1, 30)) is None


class TestStreaks:
    def test_losing_streak(self):
        # Tuesday to Saturday, nothing on Mondays
        entries = make_series(["loss"] * 5, start=date(2024, 1, 2))
        insight = get_today_insight(entries, today=MONDAY)
        assert insight.id == "pulse-streak-loss"
        assert insight.severity == Severity.WARNING
        assert insight.message.startswith("5 losses in a row")

    def test_four_wins_is_not_hot(self):
        entries = make_series(["loss", "win", "win", "win", "win"], start=date(2024, 1, 2))
        assert get_today_insight(entries, today=MONDAY) is None

    def test_five_wins_is_hot(self):
        entries = make_series(["loss"] + ["win"] * 5, start=date(2024, 1, 2))
        insight = get_today_insight(entries, today=MONDAY)
        assert insight.id == "pulse-streak-win"
        assert insight.severity == Severity.INFO

    def test_custom_win_streak_bound(self):
        config = TodayInsightConfig(win_streak_min=3)
        entries = make_series(["loss", "loss", "win", "win", "win"], start=date(2024, 1, 2))
        insight = get_today_insight(entries, today=MONDAY, config=config)
        assert insight.id == "pulse-streak-win"


class TestSelector:
    def test_fewer_than_five_entries(self):
        entries = make_series(["loss"] * 4, start=date(2024, 1, 2))
        assert get_today_insight(entries, today=MONDAY) is None

    def test_uses_injected_clock(self, monday_clock):
        entries = sorted(
            _mondays("loss", "loss", "loss")
            + make_series(["win"] * 4, start=date(2024, 1, 2)),
            key=lambda e: e.trade_date,
        )
        selector = TodayInsightSelector(clock=monday_clock)
        assert selector.select(entries).id == "pulse-day-warning"

        monday_clock.set_date(date(2024, 1, 30))
        assert selector.generate(entries) == []

    def test_explicit_date_overrides_clock(self, monday_clock):
        entries = sorted(
            _mondays("loss", "loss", "loss")
            + make_series(["win"] * 4, start=date(2024, 1, 2)),
            key=lambda e: e.trade_date,
        )
        selector = TodayInsightSelector(clock=monday_clock)
        assert selector.select(entries, today=date(2024, 1, 30)) is None
