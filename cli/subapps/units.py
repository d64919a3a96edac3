from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from chartseries.formatting import available_units, format_value

from ..common import console

units_app = typer.Typer(help="Unit formats used for legend values")


@units_app.command("list")
def list_units() -> None:
    table = Table(title="Unit formats")
    table.add_column("Unit", style="cyan")
    table.add_column("Example", justify="right")
    for unit in available_units():
        table.add_row(unit, format_value(1500, unit, 2))
    console().print(table)


@units_app.command("format")
def format_command(
    value: float = typer.Argument(...),
    unit: str = typer.Option("short", help="Unit identifier, see `units list`"),
    decimals: Optional[int] = typer.Option(2, min=0),
) -> None:
    console().print(format_value(value, unit, decimals))
