"""Unit-aware number formatting for legend values."""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "none"

ValueFormatter = Callable[[Optional[float], Optional[int]], str]
FormatFunction = Callable[[Optional[float]], str]


def to_fixed(value: Optional[float], decimals: Optional[int]) -> str:
    """Round half up to ``decimals`` places, padding with zeros to exactly that precision."""
    if value is None:
        return ""
    if value == 0:
        return "0"
    places = decimals or 0
    try:
        quantized = Decimal(repr(float(value))).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # inf/nan and values too large for the requested precision
        return str(value)
    return format(quantized, "f")


def _scaled(factor: float, suffixes: Sequence[str]) -> ValueFormatter:
    def _format(size: Optional[float], decimals: Optional[int]) -> str:
        if size is None:
            return ""
        steps = 0
        while abs(size) >= factor and steps < len(suffixes) - 1:
            steps += 1
            size /= factor
        return to_fixed(size, decimals) + suffixes[steps]

    return _format


def _stepped(ladder: Sequence[Tuple[Optional[float], float, str]]) -> ValueFormatter:
    """Pick the first ``(limit, divisor, suffix)`` whose limit exceeds ``abs(value)``."""

    def _format(size: Optional[float], decimals: Optional[int]) -> str:
        if size is None:
            return ""
        for limit, divisor, suffix in ladder:
            if limit is None or abs(size) < limit:
                return to_fixed(size / divisor, decimals) + suffix
        raise AssertionError("unit ladder must end with an open limit")  # pragma: no cover

    return _format


def _none(size: Optional[float], decimals: Optional[int]) -> str:
    return to_fixed(size, decimals)


def _percent(size: Optional[float], decimals: Optional[int]) -> str:
    if size is None:
        return ""
    return to_fixed(size, decimals) + "%"


VALUE_FORMATS: Dict[str, ValueFormatter] = {
    "none": _none,
    "short": _scaled(1000, ["", " K", " Mil", " Bil", " Tri", " Quadr", " Quint", " Sext", " Sept"]),
    "bytes": _scaled(1024, [" B", " KiB", " MiB", " GiB", " TiB", " PiB", " EiB", " ZiB", " YiB"]),
    "bits": _scaled(1024, [" b", " Kib", " Mib", " Gib", " Tib", " Pib", " Eib", " Zib", " Yib"]),
    "bps": _scaled(1000, [" bps", " Kbps", " Mbps", " Gbps", " Tbps", " Pbps", " Ebps", " Zbps", " Ybps"]),
    "Bps": _scaled(1000, [" Bps", " KBps", " MBps", " GBps", " TBps", " PBps", " EBps", " ZBps", " YBps"]),
    "percent": _percent,
    "ns": _stepped(
        [
            (1e3, 1, " ns"),
            (1e6, 1e3, " µs"),
            (1e9, 1e6, " ms"),
            (6e10, 1e9, " s"),
            (None, 6e10, " min"),
        ]
    ),
    "µs": _stepped(
        [
            (1e3, 1, " µs"),
            (1e6, 1e3, " ms"),
            (None, 1e6, " s"),
        ]
    ),
    "ms": _stepped(
        [
            (1e3, 1, " ms"),
            (6e4, 1e3, " s"),
            (3.6e6, 6e4, " min"),
            (8.64e7, 3.6e6, " hour"),
            (3.1536e10, 8.64e7, " day"),
            (None, 3.1536e10, " year"),
        ]
    ),
    "s": _stepped(
        [
            (600, 1, " s"),
            (3600, 60, " min"),
            (86400, 3600, " hour"),
            (604800, 86400, " day"),
            (31536000, 604800, " week"),
            (None, 31536000, " year"),
        ]
    ),
}
VALUE_FORMATS["us"] = VALUE_FORMATS["µs"]


def available_units() -> List[str]:
    return sorted(VALUE_FORMATS)


def resolve_unit(unit: Optional[str]) -> ValueFormatter:
    formatter = VALUE_FORMATS.get(unit or DEFAULT_UNIT)
    if formatter is None:
        logger.warning("Unknown unit format %r, falling back to %r", unit, DEFAULT_UNIT)
        formatter = VALUE_FORMATS[DEFAULT_UNIT]
    return formatter


def get_format_function(unit: Optional[str], decimals: Optional[int]) -> FormatFunction:
    """Return ``value -> str`` for ``unit`` at a fixed number of decimals."""
    formatter = resolve_unit(unit)

    def _format(value: Optional[float]) -> str:
        return formatter(value, decimals)

    return _format


def format_value(value: Optional[float], unit: Optional[str] = DEFAULT_UNIT, decimals: Optional[int] = 2) -> str:
    return get_format_function(unit, decimals)(value)
