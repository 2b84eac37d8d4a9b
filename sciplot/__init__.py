"""
SciPlot: upload a two-column dataset, plot it, summarise it, and ask
Gemini what it might mean.
"""

APP_NAME = "SciPlot"
APP_VERSION = "0.1.0"
__version__ = APP_VERSION
