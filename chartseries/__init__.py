"""Post-processing of raw chart series: overrides, gap filling and legend statistics."""
from __future__ import annotations

from .processing import (
    ExtractionResult,
    FillPolicy,
    RenderAttributes,
    Sample,
    SeriesInfo,
    SummaryStats,
    TimeSeries,
)

__version__ = "0.1.0"

__all__ = [
    "ExtractionResult",
    "FillPolicy",
    "RenderAttributes",
    "Sample",
    "SeriesInfo",
    "SummaryStats",
    "TimeSeries",
    "__version__",
]
