"""Enumerations used across the insight engine."""

from enum import Enum


class Outcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "breakeven"


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"


class Emotion(str, Enum):
    """Emotional state recorded before entering a trade."""

    CALM = "calm"
    CONFIDENT = "confident"
    ANXIOUS = "anxious"
    FEARFUL = "fearful"
    GREEDY = "greedy"
    FRUSTRATED = "frustrated"
    NEUTRAL = "neutral"


# Order matters: warnings are emitted in this order.
NEGATIVE_EMOTIONS: tuple[Emotion, ...] = (
    Emotion.ANXIOUS,
    Emotion.FEARFUL,
    Emotion.GREEDY,
    Emotion.FRUSTRATED,
)


class Severity(str, Enum):
    DANGER = "danger"
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"

    @property
    def rank(self) -> int:
        """Sort precedence, most urgent first."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.DANGER: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
    Severity.SUCCESS: 3,
}


class InsightTag(str, Enum):
    EMOTION = "emotion"
    INSTRUMENT = "instrument"
    TIME = "time"
    RISK = "risk"
    DISCIPLINE = "discipline"
    STREAK = "streak"
    PATTERN = "pattern"


class MindsetTag(str, Enum):
    """Fixed vocabulary of pre-trade mental-state tags."""

    REVENGE = "Revenge"
    FOMO = "FOMO"
    CONFIDENT = "Confident"
    UNCERTAIN = "Uncertain"
    TIRED = "Tired"


DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
