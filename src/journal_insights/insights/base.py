"""Base insight generator.

All generators inherit from BaseInsightGenerator and implement generate().
Generators are pure: no I/O, no state carried between calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterable, Sequence

from pydantic import BaseModel

from ..core.models import Insight, JournalEntry


def sort_by_severity(insights: Iterable[Insight]) -> list[Insight]:
    """Stable sort, danger first and success last."""
    return sorted(insights, key=lambda i: i.severity.rank)


class BaseInsightGenerator(ABC):
    """Abstract base for all insight generators.

    Subclasses implement generate() and name the ``Settings`` block that
    holds their thresholds in ``settings_key``.
    """

    settings_key: ClassVar[str] = ""

    def __init__(self, generator_id: str, config: BaseModel) -> None:
        self._generator_id = generator_id
        self._config = config

    @property
    def generator_id(self) -> str:
        return self._generator_id

    @abstractmethod
    def generate(self, entries: Sequence[JournalEntry]) -> list[Insight]:
        """Scan entries and return zero or more insights.

        Entries are expected in chronological order (most recent last).
        """
        ...

    def get_parameters(self) -> dict[str, Any]:
        """Return current thresholds for audit/logging."""
        return self._config.model_dump()
