"""Insight generator registry and factory.

Generators register themselves here.  Callers (and the CLI) use this to
instantiate a generator by ID, optionally with thresholds from Settings.
"""

from __future__ import annotations

from typing import Any, Type

from ..core.config import Settings
from ..core.errors import UnknownGeneratorError
from .base import BaseInsightGenerator

_REGISTRY: dict[str, Type[BaseInsightGenerator]] = {}


def register_generator(generator_id: str):
    """Decorator to register a generator class."""

    def decorator(cls: Type[BaseInsightGenerator]) -> Type[BaseInsightGenerator]:
        _REGISTRY[generator_id] = cls
        return cls

    return decorator


def create_generator(
    generator_id: str,
    settings: Settings | None = None,
    **kwargs: Any,
) -> BaseInsightGenerator:
    """Create a generator instance by ID.

    When ``settings`` is given the generator's threshold block is taken
    from it; otherwise the generator's defaults apply.
    """
    cls = _REGISTRY.get(generator_id)
    if cls is None:
        available = ", ".join(sorted(_REGISTRY.keys()))
        raise UnknownGeneratorError(
            f"Unknown insight generator '{generator_id}'. Available: {available}"
        )
    if settings is not None:
        kwargs.setdefault("config", getattr(settings, cls.settings_key))
    return cls(**kwargs)


def list_generators() -> list[str]:
    """List all registered generator IDs."""
    return sorted(_REGISTRY.keys())
