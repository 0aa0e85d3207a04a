"""Tests for configuration module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from todo_lingo.config import (
    Settings,
    SettingsContext,
    SettingsValidationError,
    get_context_settings,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
    validate_settings,
)


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self, temp_workspace: Path):
        """Test default settings values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(workspace_dir=temp_workspace)

        assert settings.app_name == "todo_lingo"
        assert settings.log_level == "warning"
        assert settings.log_format == "console"
        assert settings.translation_api_url == "https://api.mymemory.translated.net/get"
        assert settings.translation_timeout_seconds == 10.0
        assert settings.translation_cache_ttl_days == 7
        assert settings.default_source_language == "en"
        assert settings.default_target_language == "es"
        assert settings.persist_on_missing_task is True

    def test_workspace_path_expansion(self):
        """Test that ~ is expanded in workspace_dir."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(workspace_dir="~/test_workspace")

        assert settings.workspace_dir == Path.home() / "test_workspace"

    def test_derived_paths(self, temp_workspace: Path):
        """Test derived directory paths."""
        settings = Settings(workspace_dir=temp_workspace)
        assert settings.storage_dir == temp_workspace / "storage"

    def test_ensure_workspace_exists(self, tmp_path: Path):
        settings = Settings(workspace_dir=tmp_path / "new" / "workspace")
        settings.ensure_workspace_exists()
        assert settings.workspace_dir.is_dir()

    def test_cache_ttl_seconds(self, temp_workspace: Path):
        settings = Settings(workspace_dir=temp_workspace, translation_cache_ttl_days=1)
        assert settings.translation_cache_ttl_seconds == 86400

    def test_env_overrides(self, temp_workspace: Path):
        """Test TODO_LINGO_ environment variables are read."""
        env = {
            "TODO_LINGO_DEFAULT_TARGET_LANGUAGE": "zh-CN",
            "TODO_LINGO_LOG_LEVEL": "debug",
            "TODO_LINGO_PERSIST_ON_MISSING_TASK": "false",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(workspace_dir=temp_workspace)

        assert settings.default_target_language == "zh-CN"
        assert settings.log_level == "debug"
        assert settings.persist_on_missing_task is False

    def test_project_json_config(self, temp_workspace: Path, tmp_path: Path, monkeypatch):
        """Test ./.todo_lingo/settings.json is read."""
        project = tmp_path / "project"
        (project / ".todo_lingo").mkdir(parents=True)
        (project / ".todo_lingo" / "settings.json").write_text(
            json.dumps({"default_target_language": "fr"})
        )
        monkeypatch.chdir(project)

        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(workspace_dir=temp_workspace)

        assert settings.default_target_language == "fr"

    def test_unsupported_language_rejected(self, temp_workspace: Path):
        with pytest.raises(ValidationError):
            Settings(workspace_dir=temp_workspace, default_target_language="xx")

    def test_timeout_must_be_positive(self, temp_workspace: Path):
        with pytest.raises(ValidationError):
            Settings(workspace_dir=temp_workspace, translation_timeout_seconds=0)


class TestSettingsManagement:
    """Tests for the global and context settings helpers."""

    def test_set_and_get(self, mock_context):
        assert get_settings() is mock_context.settings

    def test_context_takes_precedence(self, mock_context, temp_workspace):
        other = Settings(workspace_dir=temp_workspace, default_target_language="de")
        with SettingsContext(other) as active:
            assert active is other
            assert get_settings() is other
            assert get_context_settings() is other
        assert get_settings() is mock_context.settings

    def test_set_context_settings(self, mock_context, temp_workspace):
        other = Settings(workspace_dir=temp_workspace)
        token = set_context_settings(other)
        try:
            assert get_settings() is other
        finally:
            set_context_settings(None)
        assert token is not None

    def test_reload_settings(self, temp_workspace):
        custom = Settings(workspace_dir=temp_workspace, default_target_language="ko")
        set_settings(custom)
        with patch.dict(os.environ, {}, clear=True):
            fresh = reload_settings()
        assert fresh is not custom
        assert fresh.default_target_language == "es"
        reload_settings()


class TestValidateSettings:
    """Tests for validate_settings."""

    def test_defaults_are_valid(self, temp_workspace):
        validate_settings(Settings(workspace_dir=temp_workspace))

    @pytest.mark.parametrize("url", ["ftp://example.com/get", "not a url", "https://"])
    def test_bad_api_url(self, temp_workspace, url):
        settings = Settings(workspace_dir=temp_workspace, translation_api_url=url)
        with pytest.raises(SettingsValidationError, match="http"):
            validate_settings(settings)

    def test_same_source_and_target_is_valid(self, temp_workspace):
        settings = Settings(
            workspace_dir=temp_workspace,
            default_source_language="en",
            default_target_language="en",
        )
        validate_settings(settings)
