"""
Unit tests for small helper functions in the Streamlit shell.
"""

import pytest


class TestGetSpeedLabelFromDelay:
    def test_exact_mapping(self):
        streamlit = pytest.importorskip("streamlit")
        from viz.app_streamlit import get_speed_label_from_delay  # noqa: WPS433
        assert get_speed_label_from_delay(0.1) == "Slow"
        assert get_speed_label_from_delay(0.05) == "Normal"
        assert get_speed_label_from_delay(0.016) == "Fast"

    def test_fallback_logic(self):
        streamlit = pytest.importorskip("streamlit")
        from viz.app_streamlit import get_speed_label_from_delay  # noqa: WPS433
        assert get_speed_label_from_delay(0.3) == "Slow"   # > 0.05
        assert get_speed_label_from_delay(0.02) == "Fast"  # < 0.05


class TestSessionHelpers:
    def test_make_visualizer_is_mounted(self):
        streamlit = pytest.importorskip("streamlit")
        from commuter_core.enums import LayoutMode
        from viz.app_streamlit import make_visualizer, node_options  # noqa: WPS433
        vis = make_visualizer(LayoutMode.NN, 640, 480, seed=1)
        assert vis.mounted
        assert (vis.width, vis.height) == (640.0, 480.0)
        opts = node_options(vis)
        assert opts[0] is None
        assert opts[1:] == list(range(23))

    def test_format_log(self):
        streamlit = pytest.importorskip("streamlit")
        from viz.app_streamlit import format_log  # noqa: WPS433
        assert format_log(()) == "(empty)"
        assert format_log(("b", "a")) == "b\na"
