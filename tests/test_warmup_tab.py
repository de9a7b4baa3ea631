"""Tests for the calculator page, driven through Streamlit's app tester."""
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = Path(__file__).resolve().parent.parent / "app.py"


@pytest.fixture
def app():
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    assert not at.exception
    return at


class TestWarmupTab:

    def test_default_inputs_render_both_tables(self, app):
        suggested, warmups = app.dataframe[0].value, app.dataframe[1].value
        assert suggested["weight_kg"].tolist() == [92.5, 95.0, 97.5]
        assert warmups["weight_kg"].iloc[-1] == 85.0

    def test_offset_input_reaches_the_ladder(self, app):
        app.number_input(key="warmup_offset").set_value(10.0).run()
        assert not app.exception
        assert app.dataframe[1].value["weight_kg"].iloc[-1] == 82.5

    def test_repeated_inputs_reuse_the_cached_plan(self, app):
        app.number_input(key="warmup_offset").set_value(10.0).run()
        app.number_input(key="warmup_offset").set_value(7.5).run()
        assert not app.exception
        assert app.dataframe[1].value["weight_kg"].iloc[-1] == 85.0
