"""pandas adapters feeding :class:`TimeSeries` and reading its pairs back."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import pandas as pd

from chartseries.processing import Sample, SeriesInfo, TimeSeries
from chartseries.processing.models import Pair

LOGGER = logging.getLogger(__name__)

EPOCH = pd.Timestamp("1970-01-01", tz="UTC")

PALETTE = [
    "#7EB26D",
    "#EAB839",
    "#6ED0E0",
    "#EF843C",
    "#E24D42",
    "#1F78C1",
    "#BA43A9",
    "#705DA0",
    "#508642",
    "#CCA300",
    "#447EBC",
    "#C15C17",
    "#890F02",
    "#0A437C",
    "#6D1F62",
    "#584477",
]


def _ensure_timestamp(df: pd.DataFrame, timestamp_col: str = "timestamp") -> pd.DataFrame:
    if timestamp_col in df.columns:
        df = df.copy()
        df[timestamp_col] = pd.to_datetime(df[timestamp_col], utc=True, errors="coerce")
        df = df.dropna(subset=[timestamp_col]).set_index(timestamp_col)
    elif isinstance(df.index, pd.DatetimeIndex):
        df = df.copy()
        if df.index.tz is None:
            df.index = df.index.tz_localize("UTC")
        else:
            df.index = df.index.tz_convert("UTC")
    else:
        raise ValueError("Dataframe does not contain timestamp column or datetime index")
    return df.sort_index()


def _epoch_seconds(index: pd.Index) -> List[float]:
    if isinstance(index, pd.DatetimeIndex):
        if index.tz is None:
            index = index.tz_localize("UTC")
        return [float(value) for value in (index - EPOCH).total_seconds()]
    # numeric indexes are taken as epoch seconds already
    return [float(value) for value in index]


def samples_from_series(series: pd.Series) -> List[Sample]:
    """Convert a pandas Series (datetime or epoch-second index) into samples; NaN becomes missing."""
    timestamps = _epoch_seconds(series.index)
    return [Sample(None if pd.isna(value) else float(value), ts) for ts, value in zip(timestamps, series.tolist())]


def series_from_pandas(
    series: pd.Series,
    *,
    alias: Optional[str] = None,
    color: Optional[str] = None,
) -> TimeSeries:
    name = alias if alias is not None else (str(series.name) if series.name is not None else "series")
    return TimeSeries(samples_from_series(series), SeriesInfo(alias=name, color=color))


def series_from_frame(
    frame: pd.DataFrame,
    *,
    timestamp_col: str = "timestamp",
    columns: Optional[Sequence[str]] = None,
) -> List[TimeSeries]:
    """Build one :class:`TimeSeries` per numeric column, colouring them from :data:`PALETTE`."""
    indexed = _ensure_timestamp(frame, timestamp_col)
    if columns is None:
        columns = [col for col in indexed.columns if pd.api.types.is_numeric_dtype(indexed[col])]
    else:
        missing = [col for col in columns if col not in indexed.columns]
        if missing:
            LOGGER.warning("Skipping unknown columns: %s", ", ".join(map(str, missing)))
        columns = [col for col in columns if col in indexed.columns]

    result: List[TimeSeries] = []
    for idx, column in enumerate(columns):
        color = PALETTE[idx % len(PALETTE)]
        result.append(series_from_pandas(indexed[column], alias=str(column), color=color))
    return result


def pairs_to_frame(pairs: Sequence[Pair], *, value_col: str = "value") -> pd.DataFrame:
    """Turn ``(timestamp_ms, value)`` pairs into a UTC-indexed DataFrame."""
    if not pairs:
        empty_index = pd.DatetimeIndex([], tz="UTC", name="timestamp")
        return pd.DataFrame({value_col: pd.Series(dtype="float64", index=empty_index)})
    timestamps = pd.to_datetime([ts for ts, _ in pairs], unit="ms", utc=True)
    values = [float("nan") if value is None else value for _, value in pairs]
    frame = pd.DataFrame({value_col: values}, index=timestamps)
    frame.index.name = "timestamp"
    return frame
