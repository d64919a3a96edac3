"""Configuration loading for chartseries."""
from __future__ import annotations

from .settings import ConfigurationError, LoggingSettings, ProcessingSettings, Settings, load_settings

__all__ = ["ConfigurationError", "LoggingSettings", "ProcessingSettings", "Settings", "load_settings"]
