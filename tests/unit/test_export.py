"""Tests for InsightExporter: CSV and JSON output."""

import csv
import io
import json
from datetime import date

import pytest

from journal_insights.core.enums import InsightTag, Severity
from journal_insights.core.models import Insight
from journal_insights.export import InsightExporter
from journal_insights.insights.psychology import analyse_psychology

from helpers import make_entry


@pytest.fixture
def exporter():
    return InsightExporter(decimal_places=1)


@pytest.fixture
def insights():
    return [
        Insight(
            id="instrument-worst",
            severity=Severity.DANGER,
            tag=InsightTag.INSTRUMENT,
            title="Underperforming Instrument",
            message="You only win 0% on GBPUSD (3 trades). Consider dropping it.",
            stat="0% win rate",
            icon="candlestick_chart",
        ),
        Insight(
            id="pulse-streak-win",
            severity=Severity.INFO,
            tag=InsightTag.STREAK,
            title="Hot Streak",
            message="5 wins in a row.",
            icon="local_fire_department",
        ),
    ]


class TestCSVExport:
    def test_header_and_rows(self, exporter, insights):
        rows = list(csv.DictReader(io.StringIO(exporter.to_csv(insights))))
        assert len(rows) == 2
        assert list(rows[0]) == ["id", "severity", "tag", "title", "message", "stat", "icon"]
        assert rows[0]["severity"] == "danger"
        assert rows[0]["message"].startswith("You only win 0% on GBPUSD")

    def test_missing_stat_is_blank(self, exporter, insights):
        rows = list(csv.DictReader(io.StringIO(exporter.to_csv(insights))))
        assert rows[1]["stat"] == ""

    def test_column_subset(self, exporter, insights):
        text = exporter.to_csv(insights, columns=["id", "stat"])
        assert text.splitlines()[0] == "id,stat"

    def test_empty(self, exporter):
        assert exporter.to_csv([]).strip() == "id,severity,tag,title,message,stat,icon"


class TestJSONExport:
    def test_array_of_objects(self, exporter, insights):
        data = json.loads(exporter.to_json(insights))
        assert [d["id"] for d in data] == ["instrument-worst", "pulse-streak-win"]
        assert data[1]["tag"] == "streak"

    def test_psychology_report(self, exporter):
        entries = [
            make_entry("win", trade_date=date(2024, 1, 1), readiness=5, r_multiple=1.0),
            make_entry("win", trade_date=date(2024, 1, 2), readiness=5, r_multiple=2.0),
            make_entry("loss", trade_date=date(2024, 1, 3), readiness=5, r_multiple=-1.0),
        ]
        data = json.loads(exporter.report_to_json(analyse_psychology(entries)))
        level_5 = data["readiness_stats"][4]
        assert level_5["win_rate"] == 66.7
        assert level_5["avg_r"] == 0.7
        assert data["readiness_trend"][0]["date"] == "2024-01-01"
        assert data["readiness_trend"][2]["outcome"] == "loss"
        assert data["combined_insight"] is None
