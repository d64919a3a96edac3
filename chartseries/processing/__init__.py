"""Override resolution, gap filling and pair extraction for chart series."""
from __future__ import annotations

from .gaps import fill_missing_with_zero, guess_point_distance
from .models import Aggregates, ExtractionResult, FillPolicy, Sample, SeriesInfo, SummaryStats
from .overrides import (
    BarStyle,
    LineStyle,
    PointStyle,
    RenderAttributes,
    match_series_override,
    resolve_overrides,
    translate_fill_option,
)
from .time_series import TimeSeries

__all__ = [
    "Aggregates",
    "BarStyle",
    "ExtractionResult",
    "FillPolicy",
    "LineStyle",
    "PointStyle",
    "RenderAttributes",
    "Sample",
    "SeriesInfo",
    "SummaryStats",
    "TimeSeries",
    "fill_missing_with_zero",
    "guess_point_distance",
    "match_series_override",
    "resolve_overrides",
    "translate_fill_option",
]
