"""Settings loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from chartseries.config import ConfigurationError, Settings, load_settings
from chartseries.config import settings as settings_module
from chartseries.processing import FillPolicy
from tests.conftest import get_test_logger

logger = get_test_logger(__name__)
logger.info("Starting tests for configuration")


def test_defaults_when_no_file_found(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv(settings_module.ENV_VAR, raising=False)
    monkeypatch.setattr(settings_module, "DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")
    settings = load_settings()
    assert settings == Settings()
    assert settings.processing.fill_policy is FillPolicy.CONNECTED
    assert settings.processing.y_formats == ["short", "short"]


def test_load_from_explicit_path(settings_file: Path) -> None:
    settings = load_settings(settings_file)
    assert settings.processing.fill_policy is FillPolicy.NULL_AS_ZERO
    assert settings.processing.y_formats == ["none", "bytes"]
    assert settings.processing.decimals == 1
    assert settings.logging.level == "DEBUG"
    assert settings.source == settings_file


def test_env_var_is_consulted(monkeypatch: pytest.MonkeyPatch, settings_file: Path) -> None:
    monkeypatch.setenv(settings_module.ENV_VAR, str(settings_file))
    assert load_settings().processing.decimals == 1


def test_repository_defaults_file_is_valid(project_root: Path) -> None:
    settings = load_settings(project_root / "config" / "chartseries.yaml")
    assert settings.processing.fill_policy is FillPolicy.CONNECTED


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_settings(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "content",
    [
        "processing:\n  fill_policy: sideways\n",
        "processing:\n  y_formats: []\n",
        "processing:\n  y_formats: [short, furlongs]\n",
        "processing:\n  decimals: -1\n",
        "processing:\n  decimals: many\n",
        "logging:\n  level: chatty\n",
        "- just\n- a list\n",
        "processing: [1, 2\n",
    ],
)
def test_invalid_settings_raise(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(path)


def test_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "settings.ini"
    path.write_text("[processing]\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_settings(path)
