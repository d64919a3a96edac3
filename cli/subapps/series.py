from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import typer
from pydantic import ValidationError
from rich.table import Table

from chartseries.config import Settings, load_settings
from chartseries.interfaces import SeriesPayload, SeriesResponse, build_payload, parse_overrides
from chartseries.processing import FillPolicy, SeriesInfo, TimeSeries

from ..common import console, ensure_dir, load_structured

series_app = typer.Typer(help="Process raw series into chart pairs and legend statistics")


def _settings(ctx: typer.Context) -> Settings:
    if isinstance(ctx.obj, Settings):
        return ctx.obj
    return load_settings()


def _split_document(document: Any) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    if isinstance(document, list):
        return document, []
    if isinstance(document, dict):
        return list(document.get("series") or []), list(document.get("overrides") or [])
    raise typer.BadParameter("input must be a list of series or an object with a `series` key")


def _build_series(entry: Dict[str, Any], position: int) -> TimeSeries:
    if not isinstance(entry, dict) or "datapoints" not in entry:
        raise typer.BadParameter(f"series #{position} has no `datapoints`")
    alias = entry.get("alias") or entry.get("target") or f"series-{position}"
    try:
        return TimeSeries(entry["datapoints"], SeriesInfo(alias=str(alias), color=entry.get("color")))
    except (TypeError, ValueError, IndexError) as exc:
        raise typer.BadParameter(f"series {alias!r} has malformed datapoints: {exc}") from exc


def _resolve_fill(fill: Optional[str], settings: Settings) -> FillPolicy:
    if fill is None:
        return settings.processing.fill_policy
    valid = {policy.value for policy in FillPolicy}
    if fill not in valid:
        raise typer.BadParameter(f"fill must be one of {sorted(valid)}")
    return FillPolicy(fill)


def _render_table(payloads: List[SeriesPayload]) -> Table:
    table = Table(title="Series statistics")
    table.add_column("Series", style="cyan", no_wrap=True)
    table.add_column("Axis", justify="right")
    for name in ("Min", "Max", "Avg", "Current", "Total"):
        table.add_column(name, justify="right")
    table.add_column("Points", justify="right")
    for payload in payloads:
        stats = payload.stats
        table.add_row(
            payload.name,
            str(payload.yaxis),
            stats.min or "-",
            stats.max or "-",
            stats.avg or "-",
            stats.current or "-",
            stats.total or "-",
            str(stats.count),
        )
    return table


@series_app.command("process")
def process(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="JSON/YAML document holding the raw series"),
    overrides: Optional[Path] = typer.Option(None, help="JSON/YAML list of override rules"),
    fill: Optional[str] = typer.Option(None, help="connected, null as zero, insert zero or null"),
    y_format: Optional[List[str]] = typer.Option(None, "--format", help="Unit format per y axis (repeatable)"),
    decimals: Optional[int] = typer.Option(None, min=0),
    out: Optional[Path] = typer.Option(None, help="Write the series payload JSON to this file"),
) -> None:
    settings = _settings(ctx)
    raw_series, raw_overrides = _split_document(load_structured(source))
    if overrides is not None:
        extra = load_structured(overrides) or []
        if not isinstance(extra, list):
            raise typer.BadParameter("overrides file must contain a list of rules")
        raw_overrides.extend(extra)

    try:
        rules = parse_overrides(raw_overrides)
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid override rule: {exc}") from exc

    policy = _resolve_fill(fill, settings)
    y_formats = list(y_format) if y_format else list(settings.processing.y_formats)
    precision = settings.processing.decimals if decimals is None else decimals

    payloads: List[SeriesPayload] = []
    for position, entry in enumerate(raw_series, start=1):
        series = _build_series(entry, position)
        attributes = series.apply_overrides(rules)
        result = series.get_flot_pairs(policy, y_formats, decimals=precision, attributes=attributes)
        unit_index = result.y_axis - 1
        unit = y_formats[unit_index] if 0 <= unit_index < len(y_formats) else ""
        payloads.append(build_payload(series, result, unit=unit, attributes=attributes))

    console().print(_render_table(payloads))

    if out is not None:
        response = SeriesResponse(
            series=payloads,
            meta={"source": str(source), "fill_policy": policy.value, "y_formats": y_formats},
        )
        ensure_dir(out)
        out.write_text(response.model_dump_json(indent=2), encoding="utf-8")
        console().print(f"[green]{out}[/] ready with {len(payloads)} series")
