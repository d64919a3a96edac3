"""Shared pytest configuration and fixtures for chartseries."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List

import pytest

from tests.helpers import build_datapoints, build_metric_frame, write_json

LOGS_ROOT = Path(__file__).resolve().parents[1] / "logs" / "tests"
SESSION_LOG = LOGS_ROOT / "pytest.session.log"
_MODULE_HANDLERS: Dict[str, logging.Handler] = {}


def _initialise_logging() -> None:
    LOGS_ROOT.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(SESSION_LOG, mode="w", encoding="utf-8")
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)


def get_test_logger(module_name: str) -> logging.Logger:
    """Return a logger writing into ``logs/tests/<module>.log``."""
    normalised = module_name.replace("tests.", "")
    logger = logging.getLogger(f"tests.{normalised}")
    logger.setLevel(logging.INFO)
    if normalised not in _MODULE_HANDLERS:
        LOGS_ROOT.mkdir(parents=True, exist_ok=True)
        log_path = LOGS_ROOT / f"{normalised}.log"
        handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logger.addHandler(handler)
        _MODULE_HANDLERS[normalised] = handler
    return logger


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # noqa: D401 - pytest hook
    _initialise_logging()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo[None]) -> Iterable[pytest.TestReport]:
    outcome = yield
    report = outcome.get_result()
    if report.outcome != "failed":
        return
    module = getattr(item, "module", None)
    module_name = getattr(module, "__name__", "tests")
    target = LOGS_ROOT / f"{module_name.split('.')[-1]}.log"
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("a", encoding="utf-8") as handle:
        handle.write("\n=== TEST FAILURE ===\n")
        handle.write(f"nodeid: {item.nodeid}\n")
        handle.write(f"phase: {report.when}\n")
        handle.write(str(report.longrepr))
        handle.write("\n")


@pytest.fixture(scope="session")
def project_root() -> Path:
    return Path(__file__).resolve().parents[1]


@pytest.fixture
def cpu_datapoints() -> List[list]:
    return build_datapoints([1, 2, None, 4, 5], start=1_700_000_000, step=60)


@pytest.fixture
def metric_frame():
    return build_metric_frame()


@pytest.fixture
def series_document(tmp_path: Path) -> Path:
    document = {
        "series": [
            {"target": "cpu.load", "color": "#7EB26D", "datapoints": build_datapoints([1, None, 3], step=10)},
            {"target": "mem.used", "datapoints": build_datapoints([2048, 4096, 1024], step=10)},
        ],
        "overrides": [{"alias": "/^mem\\./", "yaxis": 2, "lines": False, "bars": True}],
    }
    return write_json(document, tmp_path / "input" / "series.json")


@pytest.fixture
def overrides_yaml(tmp_path: Path) -> Path:
    path = tmp_path / "overrides.yaml"
    path.write_text(
        "- alias: cpu.load\n  fill: 0\n  linewidth: 3\n- alias: /load$/i\n  zindex: -2\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "chartseries.yaml"
    path.write_text(
        json.dumps(
            {
                "processing": {"fill_policy": "null as zero", "y_formats": ["none", "bytes"], "decimals": 1},
                "logging": {"level": "debug", "directory": str(tmp_path / "logs")},
            }
        ),
        encoding="utf-8",
    )
    return path
