import os

import streamlit as st

SECRETS_SECTION = "warmup_calculator"
ENV_PREFIX = "WARMUP_CALCULATOR_"


def get_secret(key: str, default=None):
    """
    App setting from [warmup_calculator] in Streamlit secrets, then
    WARMUP_CALCULATOR_<KEY> in the environment, then default.
    """
    try:
        secrets = st.secrets.get(SECRETS_SECTION, {})
        if key in secrets:
            return secrets[key]
    except Exception:
        # no secrets.toml configured
        pass
    return os.getenv(ENV_PREFIX + key.upper(), default)
