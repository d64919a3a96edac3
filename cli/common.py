from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from rich.console import Console

from . import APP_ROOT

_CONSOLE = Console()
LOG_DIR = APP_ROOT / "logs" / "cli"


def console() -> Console:
    return _CONSOLE


def ensure_dir(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def configure_logging(name: str, level: str = "INFO", log_dir: Optional[Path] = None) -> None:
    directory = log_dir or LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / f"{name}.log"
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def load_structured(path: Path) -> Any:
    """Read a JSON or YAML document, reporting problems as CLI parameter errors."""
    if not path.exists():
        raise typer.BadParameter(f"{path} not found")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            return yaml.safe_load(text)
        return json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(f"{path} is not valid JSON/YAML: {exc}") from exc
