"""Tests for the generator registry."""

from datetime import date

import pytest

from journal_insights.core.clock import FixedClock
from journal_insights.core.config import Settings
from journal_insights.core.errors import ConfigError, UnknownGeneratorError
from journal_insights.insights import (
    GlobalInsightGenerator,
    MonthSummaryGenerator,
    TodayInsightSelector,
    create_generator,
    list_generators,
)


class TestRegistry:
    def test_builtin_generators_registered(self):
        assert {"global", "today", "month"} <= set(list_generators())

    def test_create_by_id(self):
        assert isinstance(create_generator("global"), GlobalInsightGenerator)
        assert isinstance(create_generator("month"), MonthSummaryGenerator)
        assert isinstance(create_generator("today"), TodayInsightSelector)

    def test_unknown_id(self):
        with pytest.raises(UnknownGeneratorError, match="Available"):
            create_generator("weekly")

    def test_unknown_id_is_config_error(self):
        with pytest.raises(ConfigError):
            create_generator("weekly")

    def test_thresholds_taken_from_settings(self):
        settings = Settings(today={"win_streak_min": 3}, month={"min_decided": 4})
        today = create_generator("today", settings, clock=FixedClock(date(2024, 1, 1)))
        assert today.get_parameters()["win_streak_min"] == 3
        assert create_generator("month", settings).get_parameters()["min_decided"] == 4

    def test_generator_id(self):
        assert create_generator("month").generator_id == "month"
