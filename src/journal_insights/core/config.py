"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.

Each generator owns its own threshold block.  Similar-looking values
(e.g. the win-streak bound is 3 for the global generator and 5 for the
today selector) are tuned independently.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings

from .enums import MindsetTag
from .errors import ConfigError


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class GlobalInsightConfig(BaseModel):
    min_entries: int = 5
    min_group_size: int = 3
    extended_min_entries: int = 10  # stop-loss, streak, overall win rate
    min_r_entries: int = 10

    emotion_gap: float = 0.15
    best_emotion_margin: float = 0.10

    day_worst_max_wr: float = 0.35
    day_best_min_wr: float = 0.60
    day_gap: float = 0.15

    instrument_best_min_wr: float = 0.60
    instrument_worst_max_wr: float = 0.35

    min_no_stop_entries: int = 3
    no_stop_max_pct: int = 20  # whole percent
    no_stop_r_gap: float = 0.3

    positive_edge_min_r: float = 0.5

    win_streak_min: int = 3
    loss_streak_min: int = 3

    good_win_rate: float = 0.55
    low_win_rate: float = 0.40


class TodayInsightConfig(BaseModel):
    min_entries: int = 5
    min_day_entries: int = 3
    day_worst_max_wr: float = 0.35
    day_best_min_wr: float = 0.60
    day_gap: float = 0.15
    loss_streak_min: int = 3
    win_streak_min: int = 5


class MonthInsightConfig(BaseModel):
    min_entries: int = 3
    min_group_size: int = 3
    emotion_gap: float = 0.10
    best_day_margin: float = 0.10
    min_streak: int = 3
    instrument_share: float = 0.5
    min_decided: int = 3


class PsychologyConfig(BaseModel):
    tags: list[str] = Field(
        default_factory=lambda: [t.value for t in MindsetTag]
    )
    high_readiness: tuple[int, int] = (4, 5)
    low_readiness: tuple[int, int] = (1, 2)
    worst_tag_max_impact: float = -5.0  # percentage points
    worst_tag_min_count: int = 2
    min_trend_points: int = 2
    combined_min_entries: int = 5
    combined_min_matches: int = 2


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "console"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level engine settings.

    Loaded from TOML config files, overridden by environment variables
    (``JOURNAL_INSIGHTS_GLOBAL_INSIGHTS__EMOTION_GAP=0.2``).
    """

    global_insights: GlobalInsightConfig = Field(default_factory=GlobalInsightConfig)
    today: TodayInsightConfig = Field(default_factory=TodayInsightConfig)
    month: MonthInsightConfig = Field(default_factory=MonthInsightConfig)
    psychology: PsychologyConfig = Field(default_factory=PsychologyConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "JOURNAL_INSIGHTS_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        import tomli

        with open(path, "rb") as f:
            try:
                data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    try:
        return Settings(**data)
    except PydanticValidationError as exc:
        raise ConfigError(str(exc)) from exc
