"""
Tests for the page state reducer.
"""

import pytest

from sciplot.models import AxisRange, DataPoint, PlotConfig
from sciplot.state import (
    NO_VALID_DATA, PARSE_ERROR, AnalysisReceived, AppState, ConfigChanged, FileFailed,
    FileParsed, PlotRequested, ZoomApplied, ZoomReset, parse_bound, reduce, stats,
)

SERIES = (DataPoint(0, 1), DataPoint(1, 3), DataPoint(2, 5))


@pytest.fixture
def loaded():
    """State with a committed dataset and some zoom applied."""
    state = reduce(AppState(), FileParsed(SERIES))
    state = reduce(state, PlotRequested())
    return reduce(state, ZoomApplied(0.5, 1.5))


class TestUpload:
    """Test cases for file events."""

    def test_initial_state(self):
        state = AppState()
        assert not state.can_plot
        assert not state.has_data
        assert state.config == PlotConfig()
        assert state.config.title == "Data Visualization"

    def test_parsed_file_becomes_pending(self):
        state = reduce(AppState(), FileParsed(SERIES))
        assert state.pending == SERIES
        assert state.data == ()
        assert state.can_plot
        assert state.error is None

    def test_empty_parse_sets_error(self):
        state = reduce(AppState(pending=SERIES), FileParsed(()))
        assert state.pending == ()
        assert state.error == NO_VALID_DATA

    def test_failed_file(self):
        state = reduce(AppState(pending=SERIES), FileFailed())
        assert state.pending == ()
        assert state.error == PARSE_ERROR

    def test_good_file_clears_error(self):
        state = reduce(AppState(error=PARSE_ERROR), FileParsed(SERIES))
        assert state.error is None

    def test_new_upload_keeps_committed_data(self, loaded):
        state = reduce(loaded, FileParsed((DataPoint(9, 9),)))
        assert state.data == SERIES


class TestPlot:
    """Test cases for committing pending data."""

    def test_plot_commits_and_resets_ranges(self, loaded):
        state = reduce(loaded, ConfigChanged(PlotConfig(title="Spectrum", y_range=AxisRange(0, 10))))
        state = reduce(state, FileParsed((DataPoint(5, 5), DataPoint(6, 6))))
        state = reduce(state, PlotRequested())
        assert state.data == ((5, 5), (6, 6))
        assert state.config.x_range == AxisRange()
        assert state.config.y_range == AxisRange()
        assert state.config.title == "Spectrum"

    def test_plot_without_pending_is_noop(self):
        state = AppState()
        assert reduce(state, PlotRequested()) is state

    def test_plot_clears_previous_analysis(self, loaded):
        state = reduce(loaded, AnalysisReceived("looks linear"))
        state = reduce(reduce(state, FileParsed(SERIES)), PlotRequested())
        assert state.analysis is None

    def test_stats_follow_committed_data(self, loaded):
        assert stats(loaded).count == 3
        assert stats(loaded).mean_y == pytest.approx(3.0)
        assert stats(AppState(pending=SERIES)).count == 0


class TestZoom:
    """Test cases for zoom events."""

    def test_zoom_sets_x_range(self, loaded):
        assert loaded.config.x_range == AxisRange(0.5, 1.5)
        assert loaded.config.is_zoomed

    def test_zoom_orders_bounds(self, loaded):
        state = reduce(loaded, ZoomApplied(2, 1))
        assert state.config.x_range == AxisRange(1.0, 2.0)

    def test_zero_width_zoom_ignored(self, loaded):
        assert reduce(loaded, ZoomApplied(1, 1)) is loaded

    def test_zoom_reset(self, loaded):
        state = reduce(loaded, ZoomReset())
        assert not state.config.is_zoomed
        assert state.config.y_range == AxisRange()

    def test_reducer_does_not_mutate(self, loaded):
        before = loaded.config
        reduce(loaded, ZoomReset())
        assert loaded.config is before

    def test_unknown_event(self):
        with pytest.raises(TypeError):
            reduce(AppState(), object())


class TestParseBound:
    """Test cases for turning range inputs into optional bounds."""

    @pytest.mark.parametrize("text", [None, "", "   ", "abc", "nan", "inf"])
    def test_unset(self, text):
        assert parse_bound(text) is None

    @pytest.mark.parametrize("text,expected", [("0", 0.0), ("-2.5", -2.5), (" 1e3 ", 1000.0), (4, 4.0)])
    def test_values(self, text, expected):
        assert parse_bound(text) == expected
