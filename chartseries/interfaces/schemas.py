"""Pydantic models for override files and rendered series payloads."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from chartseries.processing import ExtractionResult, RenderAttributes, TimeSeries


class SeriesOverride(BaseModel):
    """One display override rule as stored in dashboard JSON/YAML."""

    model_config = ConfigDict(extra="ignore")

    alias: str = Field(..., description="Literal alias or /regex/flags pattern")
    lines: Optional[bool] = None
    points: Optional[bool] = None
    bars: Optional[bool] = None
    fill: Optional[int] = Field(None, ge=0, le=10, description="Fill level in tenths")
    stack: Optional[Union[bool, int, str]] = None
    linewidth: Optional[float] = None
    pointradius: Optional[float] = None
    steppedLine: Optional[bool] = None
    zindex: Optional[int] = None
    yaxis: Optional[int] = Field(None, ge=1, le=2)


class SeriesPoint(BaseModel):
    timestamp: Union[int, float] = Field(..., description="Unix timestamp in milliseconds")
    value: Optional[float] = Field(None, description="Numeric value (missing represented as null)")


class SeriesStatsPayload(BaseModel):
    total: Optional[str] = None
    min: Optional[str] = None
    max: Optional[str] = None
    avg: Optional[str] = None
    current: Optional[str] = None
    time_step: Optional[float] = Field(None, description="First emitted spacing in milliseconds")
    count: int = 0


class SeriesPayload(BaseModel):
    name: str
    unit: str = ""
    color: Optional[str] = None
    yaxis: int = 1
    options: Dict[str, Any] = Field(default_factory=dict)
    stats: SeriesStatsPayload = Field(default_factory=SeriesStatsPayload)
    data: List[SeriesPoint] = Field(default_factory=list)


class SeriesResponse(BaseModel):
    series: List[SeriesPayload]
    meta: dict = Field(default_factory=dict)


def parse_overrides(raw: Iterable[Mapping[str, Any]]) -> List[SeriesOverride]:
    return [SeriesOverride.model_validate(entry) for entry in raw]


def _point_timestamp(timestamp: float) -> Union[int, float]:
    return int(timestamp) if float(timestamp).is_integer() else timestamp


def build_payload(
    series: TimeSeries,
    result: ExtractionResult,
    *,
    unit: str = "",
    attributes: Optional[RenderAttributes] = None,
) -> SeriesPayload:
    """Bundle pairs, legend statistics and render options for one series."""
    attributes = attributes or series.attributes
    stats = result.stats
    return SeriesPayload(
        name=series.label,
        unit=unit,
        color=series.color,
        yaxis=result.y_axis,
        options=attributes.to_dict(),
        stats=SeriesStatsPayload(
            total=stats.total,
            min=stats.min,
            max=stats.max,
            avg=stats.avg,
            current=stats.current,
            time_step=stats.time_step,
            count=stats.count,
        ),
        data=[SeriesPoint(timestamp=_point_timestamp(ts), value=value) for ts, value in result.pairs],
    )
