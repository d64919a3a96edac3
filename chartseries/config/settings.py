"""Central configuration for series post-processing."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from chartseries.formatting.units import VALUE_FORMATS
from chartseries.processing.models import FillPolicy

logger = logging.getLogger(__name__)

ENV_VAR = "CHARTSERIES_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/chartseries.yaml")


class ConfigurationError(RuntimeError):
    """Raised when a configuration file is missing or invalid."""


@dataclass(slots=True)
class ProcessingSettings:
    fill_policy: FillPolicy = FillPolicy.CONNECTED
    y_formats: List[str] = field(default_factory=lambda: ["short", "short"])
    decimals: int = 2


@dataclass(slots=True)
class LoggingSettings:
    level: str = "INFO"
    directory: Path = Path("logs")


@dataclass(slots=True)
class Settings:
    processing: ProcessingSettings = field(default_factory=ProcessingSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    source: Optional[Path] = None


def _load_file(path: Path) -> Dict[str, object]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file {path} does not exist")
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(text) or {}
        elif suffix == ".json":
            data = json.loads(text)
        else:
            raise ConfigurationError("Unsupported configuration format; use YAML or JSON")
    except ConfigurationError:
        raise
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Invalid configuration format: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root in {path} must be a mapping")
    return data


def _parse_processing(raw: Dict[str, object]) -> ProcessingSettings:
    fill = raw.get("fill_policy", FillPolicy.CONNECTED.value)
    valid_fills = {policy.value for policy in FillPolicy}
    if fill not in valid_fills:
        raise ConfigurationError(f"`processing.fill_policy` must be one of {sorted(valid_fills)}, got {fill!r}")

    y_formats = raw.get("y_formats", ["short", "short"])
    if isinstance(y_formats, str):
        y_formats = [y_formats]
    if not isinstance(y_formats, list) or not y_formats:
        raise ConfigurationError("`processing.y_formats` must be a non-empty list")
    unknown = [unit for unit in y_formats if unit not in VALUE_FORMATS]
    if unknown:
        raise ConfigurationError(f"Unknown unit formats in `processing.y_formats`: {unknown}")

    try:
        decimals = int(raw.get("decimals", 2))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError("`processing.decimals` must be an integer") from exc
    if decimals < 0:
        raise ConfigurationError("`processing.decimals` must not be negative")

    return ProcessingSettings(
        fill_policy=FillPolicy.parse(fill),
        y_formats=[str(unit) for unit in y_formats],
        decimals=decimals,
    )


def load_settings(path: Optional[Path | str] = None) -> Settings:
    """Load settings from ``path``, ``$CHARTSERIES_CONFIG`` or ``config/chartseries.yaml``.

    An explicitly requested file must exist; when nothing is found on the
    implicit search path the built-in defaults are returned.
    """
    if path:
        explicit = Path(path)
        if not explicit.exists():
            raise ConfigurationError(f"Configuration file {explicit} does not exist")
        candidate_paths: List[Path] = [explicit]
    else:
        candidate_paths = []
        env_path = os.getenv(ENV_VAR)
        if env_path:
            candidate_paths.append(Path(env_path))
        candidate_paths.append(DEFAULT_CONFIG_PATH)

    for candidate in candidate_paths:
        if candidate.exists():
            raw = _load_file(candidate)
            config_path: Optional[Path] = candidate
            break
    else:
        logger.debug("No configuration file found, using defaults")
        return Settings()

    processing_raw = raw.get("processing", {}) or {}
    logging_raw = raw.get("logging", {}) or {}
    if not isinstance(processing_raw, dict) or not isinstance(logging_raw, dict):
        raise ConfigurationError("`processing` and `logging` sections must be mappings")

    logging_settings = LoggingSettings(
        level=str(logging_raw.get("level", "INFO")).upper(),
        directory=Path(logging_raw.get("directory", "logs")),
    )
    if logging_settings.level not in logging.getLevelNamesMapping():
        raise ConfigurationError(f"Unknown log level {logging_settings.level!r}")

    return Settings(
        processing=_parse_processing(processing_raw),
        logging=logging_settings,
        source=config_path,
    )
