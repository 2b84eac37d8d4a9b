import logging

import google.generativeai as genai

from .config import ANALYSIS_SAMPLE_POINTS, MODEL_NAME, get_api_key
from .data_utils import downsample_data
from .models import DataSeries, DataStats

logger = logging.getLogger(__name__)

MISSING_KEY = "API Key not found in environment. Analysis unavailable."
NO_ANALYSIS = "No analysis could be generated."
ANALYSIS_FAILED = "An error occurred while analyzing the data. Please check your connection or API key quota."

# ================== LLM PROMPT ==================
PROMPT_TEMPLATE = """
As a senior data scientist, analyze the following scientific dataset.

Context:
- X-Axis: {x_label}
- Y-Axis: {y_label}

Statistics:
- Count: {count}
- X Range: {min_x:.4f} to {max_x:.4f}
- Y Range: {min_y:.4f} to {max_y:.4f}
- Mean Y: {mean_y:.4f}
- Std Dev Y: {std_y:.4f}

Sample Data Points (X, Y):
[{sample}]

Please provide a concise scientific interpretation.
1. Describe the general trend (linear, exponential, periodic, noise, peaks, etc.).
2. Identify any potential anomalies or significant features (like peaks in spectra).
3. Suggest what physical phenomenon might be represented based on the axis labels (e.g., if Wavenumber vs Intensity, discuss IR/Raman peaks).

Keep the tone professional and scientific. Format with clear paragraphs.
"""


def build_prompt(series: DataSeries, stats: DataStats, x_label: str, y_label: str) -> str:
    # Representative sample only, keeps the prompt small.
    sample = downsample_data(series, ANALYSIS_SAMPLE_POINTS)
    sample_str = ", ".join(f"({p.x:.2f}, {p.y:.2f})" for p in sample)
    return PROMPT_TEMPLATE.format(
        x_label=x_label,
        y_label=y_label,
        count=stats.count,
        min_x=stats.min_x,
        max_x=stats.max_x,
        min_y=stats.min_y,
        max_y=stats.max_y,
        mean_y=stats.mean_y,
        std_y=stats.std_y,
        sample=sample_str,
    )


def analyze_data(series: DataSeries, stats: DataStats, x_label: str, y_label: str, *, api_key=None) -> str:
    """Ask Gemini for a short interpretation. Always returns displayable text."""
    api_key = api_key or get_api_key()
    if not api_key:
        return MISSING_KEY
    try:
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(MODEL_NAME)
        resp = model.generate_content(build_prompt(series, stats, x_label, y_label))
        text = getattr(resp, "text", "") or ""
    except Exception:
        logger.exception("Gemini analysis failed")
        return ANALYSIS_FAILED
    return text.strip() or NO_ANALYSIS
