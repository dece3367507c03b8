"""Shared fixtures for the journal-insights test suite."""

from __future__ import annotations

from datetime import date

import pytest

from journal_insights.core.clock import FixedClock
from journal_insights.core.config import (
    GlobalInsightConfig,
    MonthInsightConfig,
    PsychologyConfig,
    TodayInsightConfig,
)


@pytest.fixture
def global_config() -> GlobalInsightConfig:
    return GlobalInsightConfig()


@pytest.fixture
def today_config() -> TodayInsightConfig:
    return TodayInsightConfig()


@pytest.fixture
def month_config() -> MonthInsightConfig:
    return MonthInsightConfig()


@pytest.fixture
def psychology_config() -> PsychologyConfig:
    return PsychologyConfig()


@pytest.fixture
def monday_clock() -> FixedClock:
    """Clock pinned to Monday 2024-01-29."""
    return FixedClock(date(2024, 1, 29))
