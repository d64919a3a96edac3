"""pandas and JSON adapters around the series processor."""
from __future__ import annotations

from .frames import pairs_to_frame, samples_from_series, series_from_frame, series_from_pandas
from .schemas import (
    SeriesOverride,
    SeriesPayload,
    SeriesPoint,
    SeriesResponse,
    SeriesStatsPayload,
    build_payload,
    parse_overrides,
)

__all__ = [
    "SeriesOverride",
    "SeriesPayload",
    "SeriesPoint",
    "SeriesResponse",
    "SeriesStatsPayload",
    "build_payload",
    "pairs_to_frame",
    "parse_overrides",
    "samples_from_series",
    "series_from_frame",
    "series_from_pandas",
]
