# utils/parsing.py
import re

from loguru import logger

from .progression_schema import RepPattern

# "3x4", "3 X 4"
SETS_X_REPS_RE = re.compile(r"^([0-9]+)\s*[xX]\s*([0-9]+)$")
# "4-4-4", "5,3,1", "5, 5-3"
REP_LIST_SEPARATORS_RE = re.compile(r"[,-]+")
REP_TOKEN_RE = re.compile(r"^[0-9]+$")

WEIGHT_SEPARATORS_RE = re.compile(r"[\n,]+")
LOOSE_WEIGHT_SEPARATORS_RE = re.compile(r"[^0-9.]+")
# leading unsigned decimal with optional exponent, so "95kg" still reads as 95
WEIGHT_TOKEN_RE = re.compile(r"^((?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

EMPTY_PATTERN = RepPattern(0, ())


def parse_rep_pattern(text: str | None) -> RepPattern:
    """
    Parse a working-set rep scheme.

    Accepts "<sets>x<reps>" (e.g. "3x4") or a comma/hyphen separated list of
    reps per set (e.g. "4-4-4", "5,3,1"). Anything else gives an empty pattern.
    """
    s = (text or "").strip()

    m = SETS_X_REPS_RE.match(s)
    if m:
        sets = int(m.group(1))
        reps = int(m.group(2))
        return RepPattern(sets, tuple(reps for _ in range(sets)))

    parts = [p.strip() for p in REP_LIST_SEPARATORS_RE.split(s)]
    parts = [p for p in parts if p]
    if all(REP_TOKEN_RE.match(p) for p in parts):
        reps = tuple(int(p) for p in parts)
        return RepPattern(len(reps), reps)

    logger.debug("Unparseable rep pattern", text=s)
    return EMPTY_PATTERN


def _parse_weight_token(token: str) -> float | None:
    m = WEIGHT_TOKEN_RE.match(token.strip())
    if not m:
        return None
    return float(m.group(1))


def parse_weight_history(text: str | None, loose: bool = False) -> list[float]:
    """
    Parse last session's weights into an ordered list of floats.

    The strict variant splits on commas and newlines; the loose variant on any
    run of characters that are not digits or a decimal point. Tokens that do
    not start with a number are dropped.
    """
    if not text:
        return []

    separators = LOOSE_WEIGHT_SEPARATORS_RE if loose else WEIGHT_SEPARATORS_RE
    weights = []
    dropped = 0
    for token in separators.split(text):
        value = _parse_weight_token(token)
        if value is None:
            if token.strip():
                dropped += 1
            continue
        weights.append(value)

    if dropped:
        logger.debug("Dropped unparseable weight tokens", dropped=dropped, kept=len(weights))
    return weights
