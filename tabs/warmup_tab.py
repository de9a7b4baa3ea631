# tabs/warmup_tab.py
import streamlit as st

from analytics.progression import default_increments
from analytics.warmups import clamp_offset
from data_model import SessionPlan, build_session_plan, suggested_sets_frame, warmup_sets_frame
from utils.progression_schema import (
    DEFAULT_PCT_INCREMENTS,
    DEFAULT_WARMUP_OFFSET_KG,
    FEELINGS,
    UNIT,
    Feeling,
    ProgressionConfig,
    ProgressionMode,
    WarmupStrategy,
)
from utils.secrets import get_secret

LIFTS = ["Squat", "Bench", "Deadlift", "Overhead Press", "Other"]

STRATEGY_LABELS = {
    WarmupStrategy.PROGRESSIVE_RAMP: "Progressive ramp",
    WarmupStrategy.FIXED_STEP: "Fixed step",
}


@st.cache_data(show_spinner=False, max_entries=256)
def cached_session_plan(pattern_text: str, history_text: str, cfg: ProgressionConfig) -> SessionPlan:
    return build_session_plan(pattern_text, history_text, cfg)


def _increment_inputs(prefix: str, defaults: dict[str, float], suffix: str = "") -> dict[str, float]:
    values = {}
    cols = st.columns(len(FEELINGS))
    for col, feeling in zip(cols, FEELINGS):
        with col:
            values[feeling] = st.number_input(
                f"{feeling.capitalize()}{suffix}",
                value=float(defaults[feeling]),
                step=0.25,
                key=f"{prefix}_{feeling}",
            )
    return values


def _default_strategy() -> WarmupStrategy:
    raw = get_secret("warmup_strategy", WarmupStrategy.PROGRESSIVE_RAMP.value)
    try:
        return WarmupStrategy(raw)
    except ValueError:
        return WarmupStrategy.PROGRESSIVE_RAMP


def _default_offset() -> float:
    raw = get_secret("warmup_offset_kg", DEFAULT_WARMUP_OFFSET_KG)
    return clamp_offset(raw)


def render():
    st.header("Main Lift Warm-Up & Working Set Calculator")
    st.caption(
        "Warm-ups ramp with bigger to smaller jumps, the last warm-up sits 5-10 kg "
        "under the first working set and uses half the reps."
    )

    default_lift = get_secret("default_lift", "Squat")
    c_lift, c_reps = st.columns(2)
    with c_lift:
        lift = st.selectbox(
            "Lift",
            LIFTS,
            index=LIFTS.index(default_lift) if default_lift in LIFTS else 0,
        )
    with c_reps:
        pattern_text = st.text_input("Working sets reps", value="3x4", placeholder="3x4 or 4-4-4")

    history_text = st.text_input(f"Last week weights ({UNIT})", value="90, 92.5, 95", placeholder="90, 92.5, 95")
    loose_history = st.checkbox("Accept any separator between weights", value=False)

    c_felt, c_rule = st.columns(2)
    with c_felt:
        feeling = st.radio("How did it feel?", FEELINGS, index=FEELINGS.index(Feeling.SOLID.value), horizontal=True)
    with c_rule:
        mode_label = st.radio("Progression rule", ["by kg", "by %"], horizontal=True)
        mode = ProgressionMode.ABSOLUTE if mode_label == "by kg" else ProgressionMode.PERCENT

    # keyed by lift so the kg table resets to that lift's defaults
    if mode == ProgressionMode.ABSOLUTE:
        abs_overrides = _increment_inputs(f"abs_{lift}", default_increments(lift))
    else:
        abs_overrides = {}
    if mode == ProgressionMode.PERCENT:
        pct_increments = _increment_inputs("pct", DEFAULT_PCT_INCREMENTS, suffix=" %")
    else:
        pct_increments = dict(DEFAULT_PCT_INCREMENTS)

    c_heavy, c_offset, c_strategy = st.columns(3)
    with c_heavy:
        heavy_day = st.checkbox("Super heavy today (adds an extra single)", value=False)
    with c_offset:
        offset = st.number_input(
            "Last warm-up offset (kg under first working set)",
            min_value=5.0,
            max_value=10.0,
            value=_default_offset(),
            step=0.5,
            key="warmup_offset",
        )
    with c_strategy:
        strategies = list(STRATEGY_LABELS)
        strategy = st.selectbox(
            "Warm-up strategy",
            strategies,
            index=strategies.index(_default_strategy()),
            format_func=STRATEGY_LABELS.get,
        )

    cfg = ProgressionConfig(
        lift=lift,
        mode=mode,
        feeling=Feeling(feeling),
        abs_overrides=tuple(abs_overrides.items()),
        pct_increments=tuple(pct_increments.items()),
        heavy_day=heavy_day,
        warmup_offset_kg=offset,
        warmup_strategy=strategy,
        loose_history=loose_history,
    )
    plan = cached_session_plan(pattern_text, history_text, cfg)

    c_sugg, c_wu = st.columns(2)
    with c_sugg:
        st.subheader(f"Suggested working sets ({lift} • {UNIT.upper()})")
        if not plan.suggested:
            st.info("Add last week’s weights to get suggestions.")
        else:
            st.dataframe(suggested_sets_frame(plan), use_container_width=True, hide_index=True)

    with c_wu:
        st.subheader(f"Auto warm-ups ({STRATEGY_LABELS[strategy].lower()})")
        if not plan.warmups:
            st.info("Enter last week + feeling to see warm-ups.")
        else:
            st.dataframe(warmup_sets_frame(plan), use_container_width=True, hide_index=True)
