"""Unit tests for configuration defaults and overrides."""

from __future__ import annotations

from typing import TYPE_CHECKING

import platformdirs
import pydantic
import pytest

from llmstxt_explorer import __version__
from llmstxt_explorer.config import (
    DEFAULT_WEBSITES_URL,
    CheckerSettings,
    Settings,
    _find_config_file,
)

if TYPE_CHECKING:
    from pathlib import Path


class TestCheckerDefaults:
    def test_time_budgets(self) -> None:
        settings = CheckerSettings()
        assert settings.fetch_timeout_seconds == 5.0
        assert settings.linked_timeout_seconds == 10.0
        assert settings.global_timeout_seconds == 15.0
        assert settings.max_linked_urls == 3

    def test_user_agent_carries_version(self) -> None:
        assert CheckerSettings().user_agent == f"llms-txt-explorer/{__version__}"

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            CheckerSettings(fetch_timeout_seconds=0)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.server.transport == "stdio"
        assert settings.registry.url == DEFAULT_WEBSITES_URL
        assert settings.logging.format == "json"

    def test_env_override_nested(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LLMSTXT_EXPLORER__CHECKER__GLOBAL_TIMEOUT_SECONDS", "30")
        monkeypatch.setenv("LLMSTXT_EXPLORER__SERVER__TRANSPORT", "http")
        settings = Settings()
        assert settings.checker.global_timeout_seconds == 30.0
        assert settings.server.transport == "http"

    def test_constructor_overrides(self) -> None:
        settings = Settings(checker={"max_linked_urls": 5})
        assert settings.checker.max_linked_urls == 5
        assert settings.checker.fetch_timeout_seconds == 5.0


class TestFindConfigFile:
    def test_cwd_file_preferred(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "llmstxt-explorer.yaml").write_text("logging:\n  level: DEBUG\n")
        assert _find_config_file() == "llmstxt-explorer.yaml"

    def test_platform_config_dir_fallback(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "llmstxt-explorer.yaml").write_text("{}\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(platformdirs, "user_config_dir", lambda _name: str(config_dir))
        assert _find_config_file() == str(config_dir / "llmstxt-explorer.yaml")

    def test_none_when_absent(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(platformdirs, "user_config_dir", lambda _name: str(tmp_path / "none"))
        assert _find_config_file() is None
