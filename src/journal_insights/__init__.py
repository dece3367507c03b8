"""Behavioral Insight Engine for trading journals.

Pure, deterministic functions that turn a batch of journal entries into
ranked, human-readable behavioral insights.

    from journal_insights import parse_entries, generate_insights

    entries = parse_entries(records)
    for insight in generate_insights(entries):
        print(insight.severity.value, insight.message)
"""

from .core.errors import ConfigError, InsightEngineError, ValidationError
from .core.models import Insight, JournalEntry, PreTradeMindset, parse_entries, parse_entry
from .insights import (
    analyse_psychology,
    generate_insights,
    generate_month_insight,
    get_today_insight,
)

__all__ = [
    "ConfigError",
    "InsightEngineError",
    "ValidationError",
    "Insight",
    "JournalEntry",
    "PreTradeMindset",
    "parse_entry",
    "parse_entries",
    "generate_insights",
    "get_today_insight",
    "generate_month_insight",
    "analyse_psychology",
]

__version__ = "0.1.0"
