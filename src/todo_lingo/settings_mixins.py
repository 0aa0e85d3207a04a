"""Settings mixins for application identity, logging, and translation.

AppSettingsMixin: Application identity and disk layout (app_name, workspace, paths).
LoggingSettingsMixin: Log level and output format.
TranslationSettingsMixin: Translation endpoint, cache lifetime, language defaults.

Kept outside config.py so each concern can be read on its own and composed
into Settings via multiple inheritance.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator

from todo_lingo.translation.languages import SUPPORTED_LANGUAGES


class AppSettingsMixin:
    """Settings for application identity and disk layout.

    Mixin class that provides:
    - Application name and workspace directory
    - Path expansion for workspace_dir
    - Derived storage directory

    Should be composed with BaseSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="todo_lingo",
        title="App Name",
        description="Application name, also used for config directories",
    )

    workspace_dir: Path = Field(
        default_factory=lambda: Path.home() / ".todo_lingo",
        title="Workspace Directory",
        description="Directory holding persisted tasks and the translation cache",
    )

    persist_on_missing_task: bool = Field(
        default=True,
        title="Persist On Missing Task",
        description=(
            "Write the task list even when toggle/delete/annotate "
            "target an id that does not exist"
        ),
    )

    @field_validator("workspace_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ and environment variables in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    def ensure_workspace_exists(self) -> None:
        """Create workspace directory if it doesn't exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)

    @property
    def storage_dir(self) -> Path:
        """Directory for the key-value storage files."""
        return self.workspace_dir / "storage"


class LoggingSettingsMixin:
    """Settings for logging output.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )


class TranslationSettingsMixin:
    """Settings for the translation client."""

    translation_api_url: str = Field(
        default="https://api.mymemory.translated.net/get",
        title="Translation API URL",
        description="GET endpoint taking q and langpair parameters",
    )
    translation_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        title="Translation Timeout",
        description="Timeout for a single translation request, in seconds",
    )
    translation_cache_ttl_days: float = Field(
        default=7,
        gt=0,
        title="Translation Cache TTL",
        description="Days a cached translation stays valid",
    )
    default_source_language: str = Field(
        default="en",
        title="Source Language",
        description="Language task text is written in",
    )
    default_target_language: str = Field(
        default="es",
        title="Target Language",
        description="Language tasks are translated into",
    )

    @field_validator("default_source_language", "default_target_language")
    @classmethod
    def check_language(cls, v: str) -> str:
        """Reject language codes outside the supported set."""
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language code: {v!r}")
        return v

    @property
    def translation_cache_ttl_seconds(self) -> float:
        """Cache lifetime in seconds."""
        return self.translation_cache_ttl_days * 24 * 60 * 60
