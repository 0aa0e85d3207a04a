"""Shared test fixtures and utilities for todo-lingo tests.

Provides:
- MockContext for isolating tests from global settings
- In-memory storage and a controllable clock
- A fake translation endpoint built on httpx.MockTransport
"""

import asyncio
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Generator

import httpx
import pytest

from todo_lingo.config import Settings, reload_settings, set_context_settings, set_settings
from todo_lingo.storage import MemoryStorage


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Resetting global settings singleton
    - Providing a temporary workspace directory
    - Clearing TODO_LINGO_* environment variables

    Usage:
        with MockContext() as ctx:
            settings = ctx.settings
            workspace = ctx.workspace_dir
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: Settings | None = None
        self._original_env: dict[str, str] = {}

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        workspace_dir = Path(self._temp_dir.name)

        for var in [name for name in os.environ if name.startswith("TODO_LINGO_")]:
            self._original_env[var] = os.environ.pop(var)

        self._settings = Settings(
            workspace_dir=workspace_dir,
            **self._settings_kwargs,
        )
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_context_settings(None)
        os.environ.update(self._original_env)
        reload_settings()
        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def workspace_dir(self) -> Path:
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


class FakeClock:
    """Manually advanced clock usable as both a datetime and an epoch source."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def time(self) -> float:
        return self.current.timestamp()

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


class FakeTranslationAPI:
    """Records requests and answers them like the MyMemory endpoint.

    ``handler`` may be replaced to return a custom response or raise.
    """

    def __init__(self, translations: dict[str, str] | None = None) -> None:
        self.translations = translations or {}
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], Any] = self._translate

    def _translate(self, request: httpx.Request) -> httpx.Response:
        text = request.url.params["q"]
        translated = self.translations.get(text, f"[{request.url.params['langpair']}] {text}")
        return httpx.Response(200, json={"responseData": {"translatedText": translated}})

    def __call__(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        return self.handler(request)

    def hold_until(self, count: int, timeout: float = 1.0) -> None:
        """Answer nothing until ``count`` requests have arrived.

        MockTransport awaits a coroutine returned by the handler, so the
        held requests stay in flight together.
        """
        answer = self.handler
        arrived = asyncio.Event()

        async def held(request: httpx.Request) -> httpx.Response:
            if len(self.requests) >= count:
                arrived.set()
            await asyncio.wait_for(arrived.wait(), timeout)
            return answer(request)

        self.handler = held

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated settings context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Fixture providing a temporary workspace directory."""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_api() -> FakeTranslationAPI:
    return FakeTranslationAPI()
