"""Per-series display overrides resolved into render attributes."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, Mapping, NamedTuple, Optional, Pattern, Union

logger = logging.getLogger(__name__)

ZERO_FILL_LEVEL = 0.001

_REGEX_RULE = re.compile(r"/(.*?)/(g?i?m?y?)")
_FLAG_MAP = {"i": re.IGNORECASE, "m": re.MULTILINE}
_NUMERIC_FIELDS: Dict[str, Callable[[Any], Any]] = {"fill": float, "zindex": int, "yaxis": int}

StackGroup = Union[bool, int, str]


@dataclass(frozen=True, slots=True)
class LineStyle:
    show: Optional[bool] = None
    fill: Optional[float] = None
    line_width: Optional[float] = None
    steps: Optional[bool] = None


@dataclass(frozen=True, slots=True)
class PointStyle:
    show: Optional[bool] = None
    radius: Optional[float] = None


@dataclass(frozen=True, slots=True)
class BarStyle:
    show: Optional[bool] = None


@dataclass(frozen=True, slots=True)
class RenderAttributes:
    """Chart styling for one series; unset style fields defer to global defaults."""

    lines: LineStyle = field(default_factory=LineStyle)
    points: PointStyle = field(default_factory=PointStyle)
    bars: BarStyle = field(default_factory=BarStyle)
    stack: Optional[StackGroup] = None
    z_index: int = 0
    y_axis: int = 1

    @property
    def stacked(self) -> bool:
        return self.stack is not None and self.stack is not False

    def to_dict(self) -> Dict[str, object]:
        """Return the flot-style option mapping with only the fields that were set."""
        lines = _compact(
            {
                "show": self.lines.show,
                "fill": self.lines.fill,
                "lineWidth": self.lines.line_width,
                "steps": self.lines.steps,
            }
        )
        points = _compact({"show": self.points.show, "radius": self.points.radius})
        bars = _compact({"show": self.bars.show})
        payload: Dict[str, object] = {
            "lines": lines,
            "points": points,
            "bars": bars,
            "zindex": self.z_index,
            "yaxis": self.y_axis,
        }
        if self.stack is not None:
            payload["stack"] = self.stack
        return payload


def _compact(values: Mapping[str, object]) -> Dict[str, object]:
    return {key: value for key, value in values.items() if value is not None}


def translate_fill_option(fill: Optional[float]) -> Optional[float]:
    """Map a 0-10 fill level onto (0, 1]; level 0 stays barely visible."""
    if fill is None:
        return None
    return ZERO_FILL_LEVEL if fill == 0 else fill / 10


class _AliasRegex(NamedTuple):
    compiled: Optional[Pattern[str]]
    sticky: bool = False
    error: Optional[str] = None


@lru_cache(maxsize=256)
def _compile_alias_regex(pattern: str) -> _AliasRegex:
    match = _REGEX_RULE.fullmatch(pattern)
    if match is None:
        return _AliasRegex(None, error="malformed regex alias")
    body, flags = match.groups()
    re_flags = 0
    for flag in flags:
        re_flags |= _FLAG_MAP.get(flag, 0)
    try:
        return _AliasRegex(re.compile(body, re_flags), sticky="y" in flags)
    except re.error as exc:
        return _AliasRegex(None, error=f"invalid regex: {exc}")


def match_series_override(alias_or_regex: Optional[str], series_alias: str) -> bool:
    """Return True when an override alias (literal or ``/regex/flags``) targets the series.

    The ``y`` flag anchors the pattern at the start of the alias.
    """
    if not isinstance(alias_or_regex, str) or not alias_or_regex:
        return False
    if alias_or_regex[0] == "/":
        rule = _compile_alias_regex(alias_or_regex)
        if rule.compiled is None:
            logger.warning("Ignoring override %r: %s", alias_or_regex, rule.error)
            return False
        matcher = rule.compiled.match if rule.sticky else rule.compiled.search
        return matcher(series_alias) is not None
    return alias_or_regex == series_alias


def _rule_fields(rule: Any) -> Dict[str, Any]:
    # pydantic models only report the keys the rule actually carried
    if hasattr(rule, "model_dump"):
        return rule.model_dump(exclude_unset=True)
    fields = dict(rule)
    for key, cast in _NUMERIC_FIELDS.items():
        raw = fields.get(key)
        if raw is None:
            continue
        try:
            fields[key] = cast(raw)
        except (TypeError, ValueError, OverflowError):
            logger.warning("Ignoring override field %s=%r for %r: not a number", key, raw, fields.get("alias"))
            del fields[key]
    return fields


def resolve_overrides(alias: str, overrides: Iterable[Any]) -> RenderAttributes:
    """Build render attributes for ``alias`` from scratch, later rules winning per field."""
    lines: Dict[str, Any] = {}
    points: Dict[str, Any] = {}
    bars: Dict[str, Any] = {}
    top: Dict[str, Any] = {"stack": None, "z_index": 0, "y_axis": 1}

    for rule in overrides:
        fields = _rule_fields(rule)
        if not match_series_override(fields.get("alias"), alias):
            continue
        if "lines" in fields:
            lines["show"] = fields["lines"]
        if "points" in fields:
            points["show"] = fields["points"]
        if "bars" in fields:
            bars["show"] = fields["bars"]
        if "fill" in fields:
            lines["fill"] = translate_fill_option(fields["fill"])
        if "stack" in fields:
            top["stack"] = fields["stack"]
        if "linewidth" in fields:
            lines["line_width"] = fields["linewidth"]
        if "pointradius" in fields:
            points["radius"] = fields["pointradius"]
        if "steppedLine" in fields:
            lines["steps"] = fields["steppedLine"]
        if "zindex" in fields:
            top["z_index"] = fields["zindex"]
        if "yaxis" in fields:
            top["y_axis"] = fields["yaxis"]

    return RenderAttributes(
        lines=LineStyle(**lines),
        points=PointStyle(**points),
        bars=BarStyle(**bars),
        stack=top["stack"],
        z_index=top["z_index"] if top["z_index"] is not None else 0,
        y_axis=top["y_axis"] if top["y_axis"] is not None else 1,
    )
