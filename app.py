import logging

import streamlit as st
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from sciplot import APP_NAME
from sciplot.analysis import analyze_data
from sciplot.chart import export_filename, figure_to_png, render_chart
from sciplot.config import LOG_LEVEL
from sciplot.data_utils import decode_upload, format_series, parse_file_content, series_to_frame
from sciplot.errors import ParseFailure
from sciplot.models import AxisRange, PlotConfig
from sciplot.state import (
    AnalysisReceived, AppState, ConfigChanged, FileFailed, FileParsed, PlotRequested,
    ZoomApplied, ZoomReset, parse_bound, reduce, stats,
)

# ================== CONFIG ==================
st.set_page_config(page_title=f"{APP_NAME} — Scientific Analysis & Visualization", page_icon="🔬", layout="wide")
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


# ================== STATE ==================
def _bound_text(v):
    return "" if v is None else str(v)


def _sync_widgets(config: PlotConfig):
    """Push a config into the sidebar widgets (only safe inside callbacks)."""
    st.session_state.title = config.title
    st.session_state.x_label = config.x_label
    st.session_state.y_label = config.y_label
    st.session_state.x_min = _bound_text(config.x_range.min)
    st.session_state.x_max = _bound_text(config.x_range.max)
    st.session_state.y_min = _bound_text(config.y_range.min)
    st.session_state.y_max = _bound_text(config.y_range.max)


def _config_from_widgets() -> PlotConfig:
    ss = st.session_state
    return PlotConfig(
        title=ss.title,
        x_label=ss.x_label,
        y_label=ss.y_label,
        x_range=AxisRange(parse_bound(ss.x_min), parse_bound(ss.x_max)),
        y_range=AxisRange(parse_bound(ss.y_min), parse_bound(ss.y_max)),
    )


def dispatch(event):
    st.session_state.app_state = reduce(st.session_state.app_state, event)
    return st.session_state.app_state


if "app_state" not in st.session_state:
    st.session_state.app_state = AppState()
    _sync_widgets(st.session_state.app_state.config)
    st.session_state.last_upload = None


# ================== CALLBACKS ==================
def on_plot():
    state = dispatch(PlotRequested())
    logger.info("Plotting %d points", len(state.data))
    _sync_widgets(state.config)


def on_zoom_apply():
    left, right = st.session_state.zoom_x
    _sync_widgets(dispatch(ZoomApplied(left, right)).config)


def on_zoom_reset():
    _sync_widgets(dispatch(ZoomReset()).config)


def handle_upload(uploaded):
    """Parse a newly picked file once; reruns with the same file are no-ops."""
    if uploaded is None:
        return
    upload_id = getattr(uploaded, "file_id", None) or (uploaded.name, uploaded.size)
    if upload_id == st.session_state.last_upload:
        return
    st.session_state.last_upload = upload_id
    try:
        series = parse_file_content(decode_upload(uploaded.getvalue()))
    except ParseFailure as e:
        logger.warning("Could not read %s: %s", uploaded.name, e)
        dispatch(FileFailed())
        return
    logger.info("Parsed %s: %d points", uploaded.name, len(series))
    dispatch(FileParsed(series))


# ================== SIDEBAR ==================
with st.sidebar:
    st.header("CONTROLS")
    uploaded_file = st.file_uploader("Upload Data (.csv, .txt)", type=["csv", "txt"])
    st.caption("Format: Two columns (X Y) separated by comma, tab, or space.")
    handle_upload(uploaded_file)
    st.button("PLOT DATA", on_click=on_plot, disabled=not st.session_state.app_state.can_plot,
              use_container_width=True)

    st.divider()
    st.subheader("Labels")
    st.text_input("Chart Title", key="title")
    c1, c2 = st.columns(2)
    c1.text_input("X Label", key="x_label")
    c2.text_input("Y Label", key="y_label")

    st.divider()
    st.subheader("Axis Ranges")
    st.caption("Leave blank to autoscale.")
    c1, c2 = st.columns(2)
    c1.text_input("X min", key="x_min", placeholder="Min")
    c2.text_input("X max", key="x_max", placeholder="Max")
    c1, c2 = st.columns(2)
    c1.text_input("Y min", key="y_min", placeholder="Min")
    c2.text_input("Y max", key="y_max", placeholder="Max")

config = _config_from_widgets()
state = st.session_state.app_state
if config != state.config:
    state = dispatch(ConfigChanged(config))

# ================== MAIN UI ==================
summary = stats(state)
st.title(f"🔬 {APP_NAME}")
st.caption("Scientific Analysis & Visualization")
if state.has_data:
    m1, m2 = st.columns(2)
    m1.metric("Points", summary.count)
    m2.metric("Mean Y", f"{summary.mean_y:.3f}")

if state.error:
    st.error(state.error)

st.subheader(state.config.title)
if not state.has_data:
    st.info('Upload a .txt or .csv file, then click "PLOT DATA"')
else:
    st.caption(f"X: {state.config.x_label} · Y: {state.config.y_label}")
    fig = render_chart(state.data, state.config)
    png = figure_to_png(fig)
    st.pyplot(fig, use_container_width=True, clear_figure=True)
    plt.close(fig)

    if summary.min_x < summary.max_x:
        current = state.config.x_range
        lo = summary.min_x if current.min is None else min(max(current.min, summary.min_x), summary.max_x)
        hi = summary.max_x if current.max is None else min(max(current.max, lo), summary.max_x)
        st.slider("Zoom X range", min_value=summary.min_x, max_value=summary.max_x, value=(lo, hi), key="zoom_x")
    z1, z2, z3, z4 = st.columns(4)
    if summary.min_x < summary.max_x:
        z1.button("Apply zoom", on_click=on_zoom_apply)
    if state.config.is_zoomed:
        z2.button("RESET", on_click=on_zoom_reset, help="Reset Zoom")
    z3.download_button("SAVE PNG", data=png, file_name=export_filename(state.config.title), mime="image/png")
    z4.download_button("Export CSV", data=format_series(state.data) + "\n", file_name="data.csv", mime="text/csv")

    st.markdown("### 📐 Statistics")
    st.table({
        "Count": [summary.count],
        "X Range": [f"{summary.min_x:.4f} to {summary.max_x:.4f}"],
        "Y Range": [f"{summary.min_y:.4f} to {summary.max_y:.4f}"],
        "Mean Y": [f"{summary.mean_y:.4f}"],
        "Std Dev Y": [f"{summary.std_y:.4f}"],
    })
    with st.expander("Data preview"):
        st.dataframe(series_to_frame(state.data, state.config.x_label, state.config.y_label).head(200),
                     use_container_width=True)

    # ===== LLM interpretation =====
    st.markdown("### 🤖 Ask Gemini")
    if st.button("Analyze with Gemini", type="primary"):
        logger.info("Requesting analysis for %d points", summary.count)
        with st.spinner("Asking Gemini…"):
            text = analyze_data(state.data, summary, state.config.x_label, state.config.y_label)
        state = dispatch(AnalysisReceived(text))
    if state.analysis:
        st.markdown(state.analysis)
