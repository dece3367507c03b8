"""Tests for the journal-insights command line."""

import json
import logging
from datetime import date, timedelta

import pytest
from click.testing import CliRunner

from journal_insights.cli import main


def _record(day, outcome, instrument="EURUSD", **extra):
    record = {
        "instrument": instrument,
        "trade_date": (date(2024, 1, 1) + timedelta(days=day)).isoformat(),
        "outcome": outcome,
        "emotion_before": "neutral",
        "stop_loss": 1.0,
    }
    record.update(extra)
    return record


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def entries_file(tmp_path):
    """Ten entries: EURUSD always wins, GBPUSD always loses."""
    records = (
        [_record(i, "win") for i in range(4)]
        + [_record(i, "loss", "GBPUSD") for i in range(4, 7)]
        + [_record(7, "win", "XAUUSD"), _record(8, "loss", "XAUUSD"), _record(9, "win", "XAUUSD")]
    )
    # newest first on disk; the CLI sorts by trade date
    path = tmp_path / "journal.json"
    path.write_text(json.dumps(list(reversed(records))))
    return path


class TestInsightsCommand:
    def test_json_output(self, runner, entries_file):
        result = runner.invoke(main, ["insights", str(entries_file), "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [d["id"] for d in data] == ["instrument-worst", "instrument-best", "overall-wr-good"]

    def test_text_output(self, runner, entries_file):
        result = runner.invoke(main, ["insights", str(entries_file)])
        assert result.exit_code == 0
        assert "DANGER" in result.output
        assert "Underperforming Instrument" in result.output

    def test_csv_output(self, runner, entries_file):
        result = runner.invoke(main, ["insights", str(entries_file), "--format", "csv"])
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "id,severity,tag,title,message,stat,icon"

    def test_not_enough_data(self, runner, tmp_path):
        path = tmp_path / "few.json"
        path.write_text(json.dumps([_record(0, "win")]))
        result = runner.invoke(main, ["insights", str(path)])
        assert result.exit_code == 0
        assert "Not enough data for insights yet." in result.output

    def test_invalid_entry(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('[{"instrument": "EURUSD", "trade_date": "2024-01-01", "r_multiple": NaN}]')
        result = runner.invoke(main, ["insights", str(path)])
        assert result.exit_code == 2
        assert "Invalid input" in result.output

    def test_not_utf8(self, runner, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'[{"instrument": "EUR\xa3USD"}]')
        result = runner.invoke(main, ["insights", str(path)])
        assert result.exit_code == 2
        assert "Invalid input" in result.output

    def test_not_a_list(self, runner, tmp_path):
        path = tmp_path / "object.json"
        path.write_text('{"entries": []}')
        result = runner.invoke(main, ["insights", str(path)])
        assert result.exit_code == 2


class TestTodayCommand:
    def test_streak_on_given_date(self, runner, tmp_path):
        path = tmp_path / "journal.json"
        path.write_text(json.dumps([_record(i, "loss") for i in range(1, 6)]))
        result = runner.invoke(main, ["today", str(path), "--date", "2024-01-29"])
        assert result.exit_code == 0
        assert "Losing Streak" in result.output

    def test_nothing_notable(self, runner, entries_file):
        result = runner.invoke(main, ["today", str(entries_file), "--date", "2024-01-29"])
        assert result.exit_code == 0
        assert "Nothing notable for today." in result.output

    def test_bad_date(self, runner, entries_file):
        result = runner.invoke(main, ["today", str(entries_file), "--date", "yesterday"])
        assert result.exit_code == 2


class TestMonthCommand:
    def test_month_summary(self, runner, entries_file):
        result = runner.invoke(main, ["month", str(entries_file), "--month", "2024-01"])
        assert result.exit_code == 0
        assert "Winning Run" in result.output

    def test_empty_month(self, runner, entries_file):
        result = runner.invoke(main, ["month", str(entries_file), "--month", "2024-03"])
        assert result.exit_code == 0
        assert "No trades this month yet." in result.output

    def test_bad_month(self, runner, entries_file):
        result = runner.invoke(main, ["month", str(entries_file), "--month", "March"])
        assert result.exit_code == 2


class TestPsychologyCommand:
    def test_writes_report(self, runner, tmp_path):
        records = [
            _record(i, "win", pre_trade_mindset={"readiness": 5, "tags": ["Confident"]})
            for i in range(3)
        ] + [
            _record(i, "loss", pre_trade_mindset={"readiness": 1, "tags": ["Tired"]})
            for i in range(3, 5)
        ]
        src = tmp_path / "journal.json"
        src.write_text(json.dumps(records))
        out = tmp_path / "report.json"

        result = runner.invoke(main, ["psychology", str(src), "--out", str(out)])
        assert result.exit_code == 0
        assert f"Report written to {out}" in result.output

        report = json.loads(out.read_text())
        assert report["has_mindset_data"] is True
        assert report["worst_tag"]["tag"] == "Tired"
        assert report["combined_insight"]["best"]["readiness_range"] == "4-5"


class TestGroup:
    def test_lists_generators(self, runner):
        result = runner.invoke(main, ["generators"])
        assert result.exit_code == 0
        assert result.output.split() == ["global", "month", "today"]

    def test_missing_config(self, runner, entries_file, tmp_path):
        result = runner.invoke(
            main, ["--config", str(tmp_path / "nope.toml"), "insights", str(entries_file)]
        )
        assert result.exit_code == 2
