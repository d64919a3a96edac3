"""Series processor turning raw datapoints into chart pairs and legend statistics."""
from __future__ import annotations

import logging
import math
from typing import Any, Callable, Iterable, List, Optional, Sequence

from chartseries.formatting.units import FormatFunction, get_format_function

from .gaps import fill_missing_with_zero, guess_point_distance
from .models import (
    Aggregates,
    ExtractionResult,
    FillPolicy,
    Pair,
    Sample,
    SeriesInfo,
    SummaryStats,
    coerce_samples,
)
from .overrides import RenderAttributes, resolve_overrides

logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 2
FALLBACK_Y_FORMAT = "short"

FormatterFactory = Callable[[str, int], FormatFunction]


class TimeSeries:
    """One series' datapoints plus the metadata needed to draw and summarise it.

    Built once per raw series per render cycle. ``apply_overrides`` and
    ``get_flot_pairs`` each return an immutable snapshot and also keep the
    latest one on the instance (``attributes`` / ``stats``).
    """

    def __init__(self, datapoints: Sequence[Sequence[Any]], info: SeriesInfo) -> None:
        self.datapoints: List[Sample] = coerce_samples(datapoints)
        self.info = info
        self.label = info.alias
        self.color = info.color
        self.attributes = RenderAttributes()
        self.stats = SummaryStats()

    def __repr__(self) -> str:
        return f"TimeSeries(alias={self.label!r}, points={len(self.datapoints)})"

    @property
    def y_axis(self) -> int:
        return self.attributes.y_axis

    def apply_overrides(self, overrides: Iterable[Any]) -> RenderAttributes:
        """Recompute render attributes from defaults using the matching override rules."""
        self.attributes = resolve_overrides(self.info.alias, overrides)
        return self.attributes

    def guess_point_distance(self) -> float:
        return guess_point_distance(self.datapoints)

    def fill_missing_values_with_zero(self) -> int:
        """Replace the stored samples with their zero-padded version; returns how many were added."""
        before = len(self.datapoints)
        self.datapoints = fill_missing_with_zero(self.datapoints)
        return len(self.datapoints) - before

    def get_flot_pairs(
        self,
        fill_style: FillPolicy | str | None,
        y_formats: Sequence[str],
        *,
        formatter: Optional[FormatterFactory] = None,
        decimals: int = DEFAULT_DECIMALS,
        attributes: Optional[RenderAttributes] = None,
    ) -> ExtractionResult:
        """Walk the samples once, emitting ``(timestamp_ms, value)`` pairs and summary stats.

        Args:
            fill_style: ``connected`` drops missing samples, ``null as zero`` turns
                them into 0, ``insert zero`` pads gaps at the guessed spacing first;
                anything else keeps missing samples as ``None``.
            y_formats: unit identifier per y axis, indexed by ``y_axis - 1``.
            formatter: ``(unit, decimals) -> (value -> str)`` factory, defaults to
                :func:`chartseries.formatting.units.get_format_function`.
            decimals: precision handed to the formatter.
            attributes: render attributes to read the y axis from; defaults to the
                snapshot from the last :meth:`apply_overrides` call.
        """
        policy = FillPolicy.parse(fill_style)
        attributes = attributes or self.attributes
        samples: Sequence[Sample] = self.datapoints
        if policy is FillPolicy.INSERT_ZERO:
            samples = fill_missing_with_zero(samples)

        ignore_nulls = policy is FillPolicy.CONNECTED
        null_as_zero = policy is FillPolicy.NULL_AS_ZERO

        result: List[Pair] = []
        total = 0.0
        maximum = -math.inf
        minimum = math.inf
        # a passed-through missing sample competes for the extremes as 0
        max_missing = False
        min_missing = False

        for value, timestamp in samples:
            if value is None:
                if ignore_nulls:
                    continue
                if null_as_zero:
                    value = 0.0

            compared = 0.0 if value is None else value
            if value is not None:
                total += value
            if compared > maximum:
                maximum = compared
                max_missing = value is None
            if compared < minimum:
                minimum = compared
                min_missing = value is None

            result.append((timestamp * 1000, value))

        aggregates = _collect_aggregates(
            result,
            total,
            None if min_missing else minimum,
            None if max_missing else maximum,
        )
        format_factory = formatter or get_format_function
        stats = _format_stats(aggregates, format_factory(_y_format(y_formats, attributes.y_axis), decimals))
        self.stats = stats
        return ExtractionResult(pairs=result, stats=stats, fill_policy=policy, y_axis=attributes.y_axis)


def _collect_aggregates(
    pairs: Sequence[Pair],
    total: float,
    minimum: Optional[float],
    maximum: Optional[float],
) -> Aggregates:
    time_step = pairs[1][0] - pairs[0][0] if len(pairs) > 2 else None
    if not pairs:
        return Aggregates(time_step=time_step)
    return Aggregates(
        count=len(pairs),
        total=total,
        minimum=_finite(minimum),
        maximum=_finite(maximum),
        average=total / len(pairs),
        current=pairs[-1][1],
        time_step=time_step,
    )


def _finite(extreme: Optional[float]) -> Optional[float]:
    # untouched sentinels are reported as unset
    if extreme is None or math.isinf(extreme):
        return None
    return extreme


def _format_stats(aggregates: Aggregates, fmt: FormatFunction) -> SummaryStats:
    if not aggregates.count:
        return SummaryStats(time_step=aggregates.time_step, values=aggregates)

    def _maybe(value: Optional[float]) -> Optional[str]:
        return fmt(value) if value is not None else None

    return SummaryStats(
        total=_maybe(aggregates.total),
        min=_maybe(aggregates.minimum),
        max=_maybe(aggregates.maximum),
        avg=_maybe(aggregates.average),
        current=_maybe(aggregates.current),
        time_step=aggregates.time_step,
        count=aggregates.count,
        values=aggregates,
    )


def _y_format(y_formats: Sequence[str], y_axis: int) -> str:
    index = y_axis - 1
    if 0 <= index < len(y_formats) and y_formats[index]:
        return y_formats[index]
    logger.warning("No unit format configured for y axis %s, using %r", y_axis, FALLBACK_Y_FORMAT)
    return FALLBACK_Y_FORMAT
