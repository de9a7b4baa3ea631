# utils/progression_schema.py
from dataclasses import dataclass, field
from enum import Enum

BAR_KG = 20.0
ROUNDING_KG = 2.5
UNIT = "kg"

MIN_WARMUP_OFFSET_KG = 5.0
MAX_WARMUP_OFFSET_KG = 10.0
DEFAULT_WARMUP_OFFSET_KG = 7.5


class Feeling(str, Enum):
    EASY = "easy"
    SOLID = "solid"
    HARD = "hard"
    MISSED = "missed"


class ProgressionMode(str, Enum):
    ABSOLUTE = "absolute"  # flat kg offset
    PERCENT = "percent"    # % of last session's average


class WarmupStrategy(str, Enum):
    PROGRESSIVE_RAMP = "progressive_ramp"
    FIXED_STEP = "fixed_step"


FEELINGS = [f.value for f in Feeling]

# Increment tables are keyed by the plain feeling value ("easy", ...)
DEFAULT_PCT_INCREMENTS = {
    "easy": 5.0,
    "solid": 2.5,
    "hard": 0.0,
    "missed": -2.5,
}


@dataclass(frozen=True)
class RepPattern:
    set_count: int = 0
    reps: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.set_count == 0


@dataclass(frozen=True)
class SuggestedSet:
    reps: int
    weight: float


@dataclass(frozen=True)
class WarmupSet:
    reps: int
    weight: float


@dataclass(frozen=True)
class ProgressionConfig:
    lift: str = "Squat"
    mode: ProgressionMode = ProgressionMode.ABSOLUTE
    feeling: Feeling = Feeling.SOLID
    abs_overrides: tuple[tuple[str, float], ...] = ()  # (feeling, kg) pairs
    pct_increments: tuple[tuple[str, float], ...] = field(
        default_factory=lambda: tuple(DEFAULT_PCT_INCREMENTS.items())
    )
    heavy_day: bool = False
    warmup_offset_kg: float = DEFAULT_WARMUP_OFFSET_KG
    warmup_strategy: WarmupStrategy = WarmupStrategy.PROGRESSIVE_RAMP
    loose_history: bool = False
