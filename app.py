import streamlit as st

# ---- Local modules ----
from tabs import warmup_tab
from utils.log import setup_logger
from utils.secrets import get_secret


# =========================================================
# UI
# =========================================================
def main():
    st.set_page_config(page_title="Warm-Up Calculator", layout="centered")
    setup_logger(level=str(get_secret("log_level", "INFO")).upper())

    st.title("Lift Calculator")
    calculator_tab, notes_tab = st.tabs(["Calculator", "How it works"])

    with calculator_tab:
        warmup_tab.render()

    with notes_tab:
        st.header("How it works")
        st.markdown(
            "- **Working sets**: last week's weights plus a delta picked by how the session felt, "
            "either a flat kg step per lift or a percentage of last week's average, rounded to 2.5 kg.\n"
            "- **Progressive ramp**: starts near 60% of the first working set, takes a big jump, "
            "then a smaller one into the last warm-up at half the reps.\n"
            "- **Fixed step**: equal jumps backward from the last warm-up, 5 and 3 reps then half reps.\n"
            "- Warm-ups never go under the empty bar (20 kg) and always stay below the first working set."
        )


if __name__ == '__main__':
    main()
