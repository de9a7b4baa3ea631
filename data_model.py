from dataclasses import dataclass

import numpy as np
import pandas as pd
from loguru import logger

from analytics.progression import (
    first_working_set,
    progression_delta,
    resolve_increments,
    suggested_weights,
)
from analytics.warmups import generate_warmup_ladder
from utils.parsing import parse_rep_pattern, parse_weight_history
from utils.progression_schema import (
    UNIT,
    ProgressionConfig,
    RepPattern,
    SuggestedSet,
    WarmupSet,
)

SUGGESTED_COLUMNS = ["set", "reps", "weight_kg", "label"]
WARMUP_COLUMNS = ["set", "reps", "weight_kg", "pct_of_working", "label"]


@dataclass(frozen=True)
class SessionPlan:
    pattern: RepPattern
    history: tuple[float, ...]
    delta: float
    suggested: tuple[SuggestedSet, ...]
    first_working_weight: float
    first_working_reps: int
    warmups: tuple[WarmupSet, ...]


def build_session_plan(pattern_text: str, history_text: str, cfg: ProgressionConfig) -> SessionPlan:
    """
    Run the whole pipeline for one set of inputs:
    parse -> progression delta -> suggested working sets -> warm-up ladder.
    """
    pattern = parse_rep_pattern(pattern_text)
    history = parse_weight_history(history_text, loose=cfg.loose_history)

    abs_table = resolve_increments(cfg.lift, dict(cfg.abs_overrides))
    delta = progression_delta(cfg.mode, cfg.feeling, abs_table, dict(cfg.pct_increments), history)
    suggested = suggested_weights(pattern, history, delta)

    first_weight, first_reps = first_working_set(pattern, suggested)
    warmups = generate_warmup_ladder(
        first_weight,
        first_reps,
        is_heavy_day=cfg.heavy_day,
        offset_kg=cfg.warmup_offset_kg,
        strategy=cfg.warmup_strategy,
    )

    logger.debug(
        "Session plan built",
        lift=cfg.lift,
        sets=len(suggested),
        first_working_weight=first_weight,
        warmups=len(warmups),
    )
    return SessionPlan(
        pattern=pattern,
        history=tuple(history),
        delta=delta,
        suggested=tuple(suggested),
        first_working_weight=first_weight,
        first_working_reps=first_reps,
        warmups=tuple(warmups),
    )


def format_set(reps, weight: float, unit: str = UNIT) -> str:
    return f"{reps} × {weight:.1f} {unit}"


def suggested_sets_frame(plan: SessionPlan) -> pd.DataFrame:
    """
    One row per suggested working set. Reps show "?" when the pattern gave none.
    """
    if not plan.suggested:
        return pd.DataFrame(columns=SUGGESTED_COLUMNS)

    df = pd.DataFrame(
        {
            "set": np.arange(1, len(plan.suggested) + 1),
            "reps": [s.reps for s in plan.suggested],
            "weight_kg": [s.weight for s in plan.suggested],
        }
    )
    reps_text = df["reps"].astype(str).tolist() if plan.pattern.reps else ["?"] * len(df)
    df["label"] = [format_set(r, w) for r, w in zip(reps_text, df["weight_kg"])]
    return df[SUGGESTED_COLUMNS]


def warmup_sets_frame(plan: SessionPlan) -> pd.DataFrame:
    """
    One row per warm-up set with its load as a share of the first working set.
    """
    if not plan.warmups:
        return pd.DataFrame(columns=WARMUP_COLUMNS)

    df = pd.DataFrame(
        {
            "set": np.arange(1, len(plan.warmups) + 1),
            "reps": [w.reps for w in plan.warmups],
            "weight_kg": [w.weight for w in plan.warmups],
        }
    )
    df["pct_of_working"] = np.round(df["weight_kg"] / plan.first_working_weight * 100, 1)
    df["label"] = [format_set(r, w) for r, w in zip(df["reps"], df["weight_kg"])]
    return df[WARMUP_COLUMNS]
