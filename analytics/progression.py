import math
from typing import Mapping

import numpy as np
from loguru import logger

from utils.progression_schema import (
    ROUNDING_KG,
    Feeling,
    ProgressionMode,
    RepPattern,
    SuggestedSet,
)

LIGHT_INCREMENTS_KG = {"easy": 2.5, "solid": 1.25, "hard": 0.0, "missed": -1.25}
STANDARD_INCREMENTS_KG = {"easy": 5.0, "solid": 2.5, "hard": 0.0, "missed": -2.5}

# Default absolute increments per lift. Unknown lifts use DEFAULT_LIFT_KEY.
DEFAULT_LIFT_KEY = "default"
LIFT_INCREMENTS_KG = {
    "bench": LIGHT_INCREMENTS_KG,
    "bench press": LIGHT_INCREMENTS_KG,
    "overhead press": LIGHT_INCREMENTS_KG,
    DEFAULT_LIFT_KEY: STANDARD_INCREMENTS_KG,
}


def _to_float(val) -> float:
    try:
        return float(val)
    except (TypeError, ValueError):
        return math.nan


def round_half_up(val: float) -> int:
    return math.floor(val + 0.5)


def round_to(val, step: float = ROUNDING_KG) -> float:
    """
    Round to the nearest multiple of step (halves round up).
    Non-numeric, NaN and infinite values round to 0.
    """
    x = _to_float(val)
    if not math.isfinite(x):
        return 0.0
    return float(round_half_up(x / step) * step)


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def _feeling_key(feeling) -> str | None:
    try:
        return Feeling(feeling).value
    except (TypeError, ValueError):
        return None


def default_increments(lift: str | None) -> dict[str, float]:
    key = (lift or "").strip().lower()
    return dict(LIFT_INCREMENTS_KG.get(key, LIFT_INCREMENTS_KG[DEFAULT_LIFT_KEY]))


def resolve_increments(lift: str | None, overrides: Mapping | None = None) -> dict[str, float]:
    """
    Default absolute table for a lift with per-feeling caller overrides applied.
    """
    table = default_increments(lift)
    for feeling, value in (overrides or {}).items():
        key = _feeling_key(feeling)
        if key is not None:
            table[key] = _to_float(value)
    return table


def _lookup(table: Mapping | None, feeling) -> float:
    key = _feeling_key(feeling)
    if key is None or not table:
        return 0.0
    for k, v in table.items():
        if _feeling_key(k) == key:
            return _to_float(v) if v is not None else 0.0
    return 0.0


def progression_delta(
    mode,
    feeling,
    abs_table: Mapping | None,
    pct_table: Mapping | None,
    history: list[float],
) -> float:
    """
    Per-set weight change for the next session.

    absolute: flat kg offset from abs_table.
    percent: pct_table % of last session's average weight, rounded to 2.5 kg.
    """
    if mode != ProgressionMode.PERCENT:
        return _lookup(abs_table, feeling)

    avg = float(np.mean(history)) if len(history) else 0.0
    return round_to(avg * _lookup(pct_table, feeling) / 100)


def _base_weights(history: list[float], sets: int) -> list[float]:
    if len(history) == sets:
        return list(history)
    last = history[-1] if history else 0.0
    return [history[i] if i < len(history) else last for i in range(sets)]


def _reps_for_set(pattern: RepPattern, i: int) -> int:
    if i < len(pattern.reps):
        return pattern.reps[i]
    if pattern.reps:
        return pattern.reps[0]
    return 0


def suggested_weights(pattern: RepPattern, history: list[float], delta: float) -> list[SuggestedSet]:
    """
    Apply delta to last session's weights, one entry per working set.

    The set count comes from the pattern, or from the history when the
    pattern is empty. Missing history entries repeat the last known weight,
    or 0 when there is no history at all.
    """
    sets = pattern.set_count or len(history)
    base = _base_weights(history, sets)
    out = [
        SuggestedSet(reps=_reps_for_set(pattern, i), weight=round_to(w + delta))
        for i, w in enumerate(base)
    ]

    logger.debug(
        "Suggested working sets",
        sets=sets,
        delta=delta,
        weights=[s.weight for s in out],
    )
    return out


def compute_suggested_weights(
    pattern: RepPattern,
    history: list[float],
    feeling,
    mode,
    abs_table: Mapping | None,
    pct_table: Mapping | None,
) -> list[SuggestedSet]:
    delta = progression_delta(mode, feeling, abs_table, pct_table, history)
    return suggested_weights(pattern, history, delta)


def first_working_set(pattern: RepPattern, suggested: list[SuggestedSet]) -> tuple[float, int]:
    """
    Weight of the first suggested set and the first non-zero rep count of the pattern.
    """
    weight = suggested[0].weight if suggested else 0.0
    reps = next((r for r in pattern.reps if r), 0)
    return weight, reps
