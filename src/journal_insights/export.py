"""Insight export: CSV/JSON output.

Serialises generated insights and psychology reports for downstream
rendering, archival or spreadsheet analysis.  Column order is fixed so
exports diff cleanly between runs.

Usage::

    exporter = InsightExporter()
    csv_str = exporter.to_csv(insights)
    json_str = exporter.to_json(insights)
    json_str = exporter.report_to_json(psychology_report)
"""

from __future__ import annotations

import csv
import io
import json
import logging
from enum import Enum
from typing import Any, Sequence

from .core.models import Insight
from .insights.psychology import PsychologyReport

logger = logging.getLogger(__name__)

_CSV_COLUMNS = [
    "id",
    "severity",
    "tag",
    "title",
    "message",
    "stat",
    "icon",
]


class InsightExporter:
    """Export insights and psychology reports.

    Parameters
    ----------
    decimal_places : int
        Rounding precision for numeric report fields.  Default 2.
    """

    def __init__(self, *, decimal_places: int = 2) -> None:
        self._dp = decimal_places

    # ------------------------------------------------------------------ #
    # CSV Export                                                           #
    # ------------------------------------------------------------------ #

    def to_csv(
        self,
        insights: Sequence[Insight],
        *,
        columns: list[str] | None = None,
    ) -> str:
        """Export insights as a CSV string with header row."""
        cols = columns or _CSV_COLUMNS
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()

        for insight in insights:
            row = self._insight_to_row(insight)
            writer.writerow({c: row.get(c, "") for c in cols})

        return buf.getvalue()

    # ------------------------------------------------------------------ #
    # JSON Export                                                          #
    # ------------------------------------------------------------------ #

    def to_json(self, insights: Sequence[Insight], *, indent: int = 2) -> str:
        """Export insights as a JSON array."""
        rows = [self._insight_to_row(i) for i in insights]
        return json.dumps(rows, indent=indent)

    def report_to_json(self, report: PsychologyReport, *, indent: int = 2) -> str:
        """Export a psychology report as a JSON object.

        Dates become ISO strings; floats are rounded to ``decimal_places``.
        """
        return json.dumps(self._round(report.to_dict()), indent=indent, default=str)

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _insight_to_row(self, insight: Insight) -> dict[str, Any]:
        row = insight.to_dict()
        if row.get("stat") is None:
            row["stat"] = ""
        return row

    def _round(self, value: Any) -> Any:
        if isinstance(value, float):
            return round(value, self._dp)
        if isinstance(value, dict):
            return {k: self._round(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._round(v) for v in value]
        if isinstance(value, Enum):
            return value.value
        return value
