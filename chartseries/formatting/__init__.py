"""Legend value formatting keyed by unit identifier."""
from __future__ import annotations

from .units import available_units, format_value, get_format_function, to_fixed

__all__ = ["available_units", "format_value", "get_format_function", "to_fixed"]
