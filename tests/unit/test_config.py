"""Unit tests for configuration loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

import platformdirs
import pytest
from pydantic_settings import SettingsConfigDict

from foldcycle.config import _DEFAULT_CONFIG_DIR, Settings, _find_config_file
from foldcycle.models.cycle import DocumentKind

if TYPE_CHECKING:
    from pathlib import Path


class TestDefaults:
    def test_default_config_dir_matches_platformdirs(self) -> None:
        assert platformdirs.user_config_dir("foldcycle") == _DEFAULT_CONFIG_DIR

    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.cycle.echo_state is True
        assert settings.cycle.document_kind is DocumentKind.MIXED
        assert settings.session.max_documents == 32
        assert settings.logging.level == "INFO"


class TestSources:
    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FOLDCYCLE__CYCLE__ECHO_STATE", "false")
        monkeypatch.setenv("FOLDCYCLE__CYCLE__DOCUMENT_KIND", "outline")
        monkeypatch.setenv("FOLDCYCLE__SESSION__MAX_DOCUMENTS", "3")

        settings = Settings()

        assert settings.cycle.echo_state is False
        assert settings.cycle.document_kind is DocumentKind.OUTLINE
        assert settings.session.max_documents == 3

    def test_yaml_file_is_read(self, tmp_path: Path) -> None:
        config_path = tmp_path / "foldcycle.yaml"
        config_path.write_text(
            "cycle:\n  echo_state: false\nlogging:\n  format: text\n",
            encoding="utf-8",
        )

        class _YamlSettings(Settings):
            model_config = SettingsConfigDict(yaml_file=str(config_path))

        settings = _YamlSettings()
        assert settings.cycle.echo_state is False
        assert settings.logging.format == "text"

    def test_config_file_found_in_cwd(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "foldcycle.yaml").write_text("cycle: {}\n", encoding="utf-8")
        assert _find_config_file() == "foldcycle.yaml"

    def test_invalid_max_documents_rejected(self) -> None:
        with pytest.raises(ValueError):
            Settings(session={"max_documents": 0})
