"""Value types shared by the series processing stages."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple


class FillPolicy(str, Enum):
    """How missing samples are treated while extracting pairs."""

    CONNECTED = "connected"
    NULL_AS_ZERO = "null as zero"
    INSERT_ZERO = "insert zero"
    NULL = "null"

    @classmethod
    def parse(cls, value: "FillPolicy | str | None") -> "FillPolicy":
        if isinstance(value, FillPolicy):
            return value
        for policy in cls:
            if policy.value == value:
                return policy
        return cls.NULL


class Sample(NamedTuple):
    """One ``(value, timestamp)`` datapoint; ``value`` is ``None`` when missing."""

    value: Optional[float]
    timestamp: float

    @property
    def is_missing(self) -> bool:
        return self.value is None


def coerce_value(raw: Any) -> Optional[float]:
    if raw is None:
        return None
    value = float(raw)
    if math.isnan(value):
        return None
    return value


def coerce_samples(datapoints: Sequence[Sequence[Any]]) -> List[Sample]:
    """Turn raw ``[value, timestamp]`` pairs into :class:`Sample` tuples."""
    samples: List[Sample] = []
    for point in datapoints:
        if isinstance(point, Sample):
            samples.append(point)
            continue
        raw_value, raw_ts = point[0], point[1]
        samples.append(Sample(coerce_value(raw_value), float(raw_ts)))
    return samples


@dataclass(frozen=True, slots=True)
class SeriesInfo:
    alias: str
    color: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Aggregates:
    """Unformatted aggregates collected during a single extraction pass."""

    count: int = 0
    total: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    average: Optional[float] = None
    current: Optional[float] = None
    time_step: Optional[float] = None


@dataclass(frozen=True, slots=True)
class SummaryStats:
    """Legend-ready statistics; string fields are already unit formatted."""

    total: Optional[str] = None
    min: Optional[str] = None
    max: Optional[str] = None
    avg: Optional[str] = None
    current: Optional[str] = None
    time_step: Optional[float] = None
    count: int = 0
    values: Aggregates = field(default_factory=Aggregates)

    def to_dict(self) -> Dict[str, object]:
        return {
            "total": self.total,
            "min": self.min,
            "max": self.max,
            "avg": self.avg,
            "current": self.current,
            "timeStep": self.time_step,
            "count": self.count,
        }


Pair = Tuple[float, Optional[float]]


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    pairs: List[Pair]
    stats: SummaryStats
    fill_policy: FillPolicy
    y_axis: int = 1
