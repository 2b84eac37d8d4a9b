import os
import logging

logger = logging.getLogger(__name__)

# ================== CONFIG ==================
MODEL_NAME = os.getenv("SCIPLOT_MODEL", "gemini-2.5-flash")
LOG_LEVEL = os.getenv("SCIPLOT_LOG_LEVEL", "INFO").upper()

ANALYSIS_SAMPLE_POINTS = 30   # points sent to Gemini
DEFAULT_MAX_POINTS = 50
MARKER_THRESHOLD = 50         # draw point markers below this many points
FIG_W, FIG_H = 9.0, 5.0
LINE_COLOR = "#ea580c"


def get_api_key():
    """Gemini key from the environment, falling back to Streamlit secrets."""
    key = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY")
    if key:
        return key
    try:
        import streamlit as st
        return st.secrets.get("GOOGLE_API_KEY", None)
    except Exception as e:  # StreamlitSecretNotFoundError on newer releases
        logger.debug("Could not read Streamlit secrets: %s", e)
    return None
