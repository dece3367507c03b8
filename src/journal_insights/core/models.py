"""Core domain models for the insight engine.

JournalEntry is the read-only input; Insight is the output.  Both are
frozen pydantic models: the engine never mutates what it is given and
callers cannot mutate what it returns.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .enums import Direction, Emotion, InsightTag, Outcome, Severity
from .errors import ValidationError


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------

class PreTradeMindset(BaseModel):
    """Readiness score and mental-state tags captured before a trade."""

    model_config = ConfigDict(frozen=True)

    readiness: int | None = Field(default=None, ge=1, le=5)
    tags: frozenset[str] = Field(default_factory=frozenset)


class JournalEntry(BaseModel):
    """A single journal entry as consumed by the insight generators."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    id: str | None = None
    instrument: str
    trade_date: date
    direction: Direction = Direction.LONG
    outcome: Outcome | None = None  # None = open / not recorded
    emotion_before: Emotion
    r_multiple: float | None = None
    pnl: float | None = None
    stop_loss: float | None = None
    pre_trade_mindset: PreTradeMindset | None = None

    @field_validator("outcome", mode="before")
    @classmethod
    def _none_outcome(cls, value: Any) -> Any:
        if isinstance(value, str) and value.lower() in ("", "none"):
            return None
        return value

    @property
    def is_decided(self) -> bool:
        return self.outcome in (Outcome.WIN, Outcome.LOSS)

    @property
    def has_stop_loss(self) -> bool:
        return self.stop_loss is not None

    @property
    def readiness(self) -> int | None:
        if self.pre_trade_mindset is None:
            return None
        return self.pre_trade_mindset.readiness


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

class Insight(BaseModel):
    """A ranked, human-readable behavioral observation."""

    model_config = ConfigDict(frozen=True)

    id: str
    severity: Severity
    tag: InsightTag
    title: str
    message: str
    stat: str | None = None
    icon: str

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


# ---------------------------------------------------------------------------
# Boundary parsing
# ---------------------------------------------------------------------------

def parse_entry(data: dict[str, Any], *, index: int | None = None) -> JournalEntry:
    """Validate a raw record and build a JournalEntry.

    Raises
    ------
    ValidationError
        If any field is malformed (non-finite number, unparseable date,
        unknown enum value, readiness outside 1..5).
    """
    try:
        return JournalEntry.model_validate(data)
    except PydanticValidationError as exc:
        fields = ", ".join(
            ".".join(str(p) for p in err["loc"]) for err in exc.errors()
        )
        raise ValidationError(
            f"invalid journal entry ({fields})",
            index=index,
            errors=exc.errors(include_url=False),
        ) from exc


def parse_entries(records: Iterable[dict[str, Any]]) -> list[JournalEntry]:
    """Validate a batch of raw records, preserving order."""
    return [parse_entry(record, index=i) for i, record in enumerate(records)]
