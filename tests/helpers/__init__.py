"""Shared helper utilities for the chartseries test-suite."""

from .data import build_datapoints, build_metric_frame, write_json

__all__ = [
    "build_datapoints",
    "build_metric_frame",
    "write_json",
]
