"""
Exceptions raised by SciPlot.
"""

from typing import Any, Dict, Optional


class SciPlotError(Exception):
    """Base exception for all SciPlot errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ParseFailure(SciPlotError):
    """Raised when uploaded content cannot be read as text at all."""
    pass


class ConfigurationError(SciPlotError, ValueError):
    """Raised when a setting cannot work, e.g. max_points <= 0."""

    def __init__(self, message: str, setting: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.setting = setting
