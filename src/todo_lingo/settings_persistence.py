"""Settings persistence utilities.

Saves settings to JSON files for layered configuration. Settings are
saved to ./.{app_name}/settings.json (project config) by default, which
the Settings loader picks up on the next start.
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from todo_lingo.storage._utils import atomic_write_text

if TYPE_CHECKING:
    from pydantic_settings import BaseSettings


class SettingsPersistence:
    """Reads and writes the JSON files the Settings loader layers in.

    Writes go to the project config unless a path is given.
    """

    def __init__(self, app_name: str = "todo_lingo"):
        self.app_name = app_name

    @property
    def project_config_path(self) -> Path:
        """Get path to project config file (./.{app_name}/settings.json)."""
        return Path.cwd() / f".{self.app_name}" / "settings.json"

    @property
    def user_config_path(self) -> Path:
        """Get path to user config file (~/.{app_name}/settings.json)."""
        return Path.home() / f".{self.app_name}" / "settings.json"

    def save(
        self,
        settings: "BaseSettings",
        exclude_defaults: bool = True,
        path: Path | None = None,
    ) -> Path:
        """Save settings to JSON config file.

        Args:
            settings: Settings instance to save
            exclude_defaults: If True, only save non-default values
            path: Optional custom path (defaults to project_config_path)

        Returns:
            Path to the saved config file
        """
        target_path = path or self.project_config_path
        data = settings.model_dump(
            exclude_defaults=exclude_defaults,
            exclude_none=True,
        )
        data = self._serialize_paths(data)
        atomic_write_text(target_path, json.dumps(data, indent=2, default=str))
        return target_path

    def update(self, path: Path | None = None, **values: Any) -> Path:
        """Merge values into an existing config file, creating it if needed.

        Args:
            path: Optional custom path (defaults to project_config_path)
            **values: Setting names and values to write

        Returns:
            Path to the saved config file
        """
        target_path = path or self.project_config_path
        data = self.load(target_path)
        data.update(self._serialize_paths(values))
        atomic_write_text(target_path, json.dumps(data, indent=2, default=str))
        return target_path

    def load(self, path: Path | None = None) -> dict[str, Any]:
        """Load settings from JSON config file.

        If no path is specified, tries project config first, then user config.

        Returns:
            Dictionary of settings from file, or empty dict if no file exists
        """
        if path is not None:
            if not path.exists():
                return {}
            with open(path) as f:
                return json.load(f)

        for config_path in [self.project_config_path, self.user_config_path]:
            if config_path.exists():
                with open(config_path) as f:
                    return json.load(f)

        return {}

    def _serialize_paths(self, data: dict[str, Any]) -> dict[str, Any]:
        """Convert Path objects to strings recursively."""
        result = {}
        for key, value in data.items():
            if isinstance(value, Path):
                result[key] = str(value)
            elif isinstance(value, dict):
                result[key] = self._serialize_paths(value)
            else:
                result[key] = value
        return result
