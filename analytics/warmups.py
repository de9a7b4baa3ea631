import math
from typing import Callable

from loguru import logger

from analytics.progression import clamp, round_half_up, round_to
from utils.progression_schema import (
    BAR_KG,
    DEFAULT_WARMUP_OFFSET_KG,
    MAX_WARMUP_OFFSET_KG,
    MIN_WARMUP_OFFSET_KG,
    WarmupSet,
    WarmupStrategy,
)


def _is_blank(val) -> bool:
    try:
        x = float(val)
    except (TypeError, ValueError):
        return True
    return x == 0 or math.isnan(x)


def clamp_offset(offset_kg) -> float:
    """Offset of the last warm-up below the first working set, kept within 5-10 kg."""
    try:
        offset = float(offset_kg)
    except (TypeError, ValueError):
        offset = DEFAULT_WARMUP_OFFSET_KG
    if math.isnan(offset):
        offset = DEFAULT_WARMUP_OFFSET_KG
    return clamp(offset, MIN_WARMUP_OFFSET_KG, MAX_WARMUP_OFFSET_KG)


def last_warmup_weight(first_weight: float, offset: float) -> float:
    return round_to(max(BAR_KG, first_weight - offset))


def last_warmup_reps(first_reps: int) -> int:
    return max(1, math.floor(first_reps / 2))


def progressive_ramp(first_weight: float, first_reps: int, is_heavy: bool, offset: float) -> list[WarmupSet]:
    """
    Ramp with a bigger early jump and a smaller final jump into the last warm-up.

    Start sits around 60-65% of the first working set (never above 70%), the
    last warm-up is `offset` below it at half the reps. A heavy day adds a
    single between the middle and last warm-up.
    """
    last_wu = last_warmup_weight(first_weight, offset)

    start = round_to(max(BAR_KG, first_weight * 0.62))
    if start > first_weight * 0.7:
        start = round_to(max(BAR_KG, first_weight * 0.55))

    # too close to the last warm-up, pull the start down
    if last_wu - start < 12.5:
        start = round_to(max(BAR_KG, min(first_weight * 0.55, last_wu - 12.5)))

    span = max(0.0, last_wu - start)
    step2 = clamp(round_to(span * 0.35), 5, 10)
    step1 = clamp(round_to(span - step2), 10, 20)

    mid = round_to(last_wu - step2)
    start = round_to(max(BAR_KG, mid - step1))

    # order matters: each correction assumes the previous ones ran
    if start < BAR_KG:
        start = BAR_KG
    if mid <= start:
        mid = round_to(start + max(7.5, step2))
    if mid >= last_wu:
        mid = round_to(last_wu - 5)
    if mid <= start:
        mid = round_to((start + last_wu) / 2)

    last_reps = last_warmup_reps(first_reps)
    reps1 = int(clamp(first_reps + 2, 6, 8))
    reps2 = max(4, round_half_up(first_reps * 0.75))

    ladder = [
        WarmupSet(reps=reps1, weight=start),
        WarmupSet(reps=reps2, weight=mid),
        WarmupSet(reps=last_reps, weight=last_wu),
    ]

    if is_heavy:
        heavy_single = round_to(min(last_wu - 5, max(BAR_KG, first_weight * 0.85)))
        if heavy_single <= mid:
            heavy_single = round_to(mid + 5)
        ladder.insert(2, WarmupSet(reps=1, weight=heavy_single))

    return ladder


def fixed_step(first_weight: float, first_reps: int, is_heavy: bool, offset: float) -> list[WarmupSet]:
    """
    Equal jumps backward from the last warm-up: 5, 3, (1,) half reps.
    """
    count = 4 if is_heavy else 3
    jump = clamp(round_half_up(offset / 2), 5, 10)

    weights = [0.0] * count
    weights[-1] = last_warmup_weight(first_weight, offset)
    for i in range(count - 2, -1, -1):
        weights[i] = round_to(max(BAR_KG, weights[i + 1] - jump))

    last_reps = last_warmup_reps(first_reps)
    reps = [5, 3, 1, last_reps] if is_heavy else [5, 3, last_reps]
    return [WarmupSet(reps=r, weight=w) for r, w in zip(reps, weights)]


WARMUP_STRATEGIES: dict[WarmupStrategy, Callable[[float, int, bool, float], list[WarmupSet]]] = {
    WarmupStrategy.PROGRESSIVE_RAMP: progressive_ramp,
    WarmupStrategy.FIXED_STEP: fixed_step,
}


def _resolve_strategy(strategy) -> WarmupStrategy:
    try:
        return WarmupStrategy(strategy)
    except (TypeError, ValueError):
        logger.warning(
            "Unknown warm-up strategy, using progressive ramp",
            strategy=str(strategy),
        )
        return WarmupStrategy.PROGRESSIVE_RAMP


def ascending_below(candidates: list[WarmupSet], first_weight: float) -> list[WarmupSet]:
    """Keep sets that are heavier than the previous kept set and lighter than the working set."""
    seq = []
    prev = 0.0
    for wu in candidates:
        if prev < wu.weight < first_weight:
            seq.append(wu)
            prev = wu.weight
    return seq


def generate_warmup_ladder(
    first_weight,
    first_reps,
    is_heavy_day: bool = False,
    offset_kg=DEFAULT_WARMUP_OFFSET_KG,
    strategy=WarmupStrategy.PROGRESSIVE_RAMP,
) -> list[WarmupSet]:
    """
    Warm-up sets leading into the first working set, ascending by weight.

    Returns an empty list when the first working weight or reps is missing.
    """
    if _is_blank(first_weight) or _is_blank(first_reps):
        return []

    offset = clamp_offset(offset_kg)
    build = WARMUP_STRATEGIES[_resolve_strategy(strategy)]
    candidates = build(float(first_weight), int(float(first_reps)), bool(is_heavy_day), offset)
    ladder = ascending_below(candidates, float(first_weight))

    if len(ladder) < len(candidates):
        logger.debug(
            "Dropped non-ascending warm-ups",
            candidates=len(candidates),
            kept=len(ladder),
        )
    return ladder
