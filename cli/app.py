from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from chartseries.config import ConfigurationError, load_settings

from .common import configure_logging, console
from .subapps.series import series_app
from .subapps.units import units_app

app = typer.Typer(help="chartseries command line interface")
app.add_typer(series_app, name="series")
app.add_typer(units_app, name="units")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", help="Optional settings file override"),
) -> None:
    try:
        settings = load_settings(config)
    except ConfigurationError as exc:
        console().print(f"[red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc
    configure_logging("cli", settings.logging.level, settings.logging.directory / "cli")
    ctx.obj = settings


if __name__ == "__main__":
    app()
