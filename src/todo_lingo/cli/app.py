"""Interactive task list application.

This module provides the REPL that:
1. Reads input with prompt_toolkit (slash-command completion, history)
2. Adds plain text as a new task and routes /commands to the registry
3. Renders the task list, with translations, using rich
"""

from __future__ import annotations

import httpx
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import InMemoryHistory
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from todo_lingo.cli.builtin_commands import register_builtin_commands
from todo_lingo.cli.commands import CommandRegistry
from todo_lingo.config import Settings, get_settings
from todo_lingo.logging import Loggers, configure_logging
from todo_lingo.settings_persistence import SettingsPersistence
from todo_lingo.storage import FileStorage, Storage
from todo_lingo.tasks import Task, TaskStore
from todo_lingo.translation import language_name
from todo_lingo.translation.client import TranslationClient

logger = Loggers.cli()


class SlashCommandCompleter(Completer):
    """Completer that only triggers for slash commands."""

    def __init__(self, commands: list[str]) -> None:
        """Initialize with a list of command names (without leading slash)."""
        self.commands = sorted(commands)

    def get_completions(self, document: Document, complete_event):
        """Yield completions only when text starts with /."""
        text = document.text_before_cursor

        if not text.startswith("/"):
            return

        partial = text[1:].lower()

        for cmd in self.commands:
            if cmd.lower().startswith(partial):
                yield Completion(
                    text=f"/{cmd}",
                    start_position=-len(text),
                    display=f"/{cmd}",
                )


class TodoCLIApp:
    """Task list REPL.

    Wires the task store and the translation client to one storage
    backend and keeps the currently selected translation language.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        storage: Storage | None = None,
        console: Console | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        persistence: SettingsPersistence | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.storage = storage or FileStorage(self._settings.storage_dir)
        self.store = TaskStore(
            self.storage,
            persist_on_miss=self._settings.persist_on_missing_task,
        )
        self.client = TranslationClient(self.storage, self._settings, transport=transport)
        self.console = console or Console()
        self.persistence = persistence or SettingsPersistence(self._settings.app_name)
        self.language = self._settings.default_target_language
        self.command_registry = CommandRegistry()
        register_builtin_commands(self.command_registry)
        self.should_exit = False

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def source_language(self) -> str:
        return self._settings.default_source_language

    @property
    def translating(self) -> bool:
        """False when the selected language is the source language."""
        return self.language != self.source_language

    def stop(self) -> None:
        """Signal the REPL to exit after the current input."""
        self.should_exit = True

    def resolve_task(self, ref: str) -> Task | None:
        """Find a task by 1-based list position or by id."""
        ref = ref.strip()
        if not ref:
            return None
        tasks = self.store.tasks
        if ref.isdigit():
            index = int(ref) - 1
            if 0 <= index < len(tasks):
                return tasks[index]
        return self.store.get(ref)

    def set_language(self, code: str) -> None:
        """Select the translation language and remember it for next start."""
        self.language = code
        try:
            path = self.persistence.update(default_target_language=code)
        except (OSError, ValueError) as e:
            logger.warning("language_save_failed", language=code, error=str(e))
            return
        logger.info("language_saved", language=code, path=str(path))

    def render_tasks(self) -> Table | None:
        """Build the task table, or None when there are no tasks."""
        tasks = self.store.tasks
        if not tasks:
            return None

        table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 2, 0, 0))
        table.add_column("#", style="dim", no_wrap=True)
        table.add_column("", no_wrap=True)
        table.add_column("Task")
        if self.translating:
            table.add_column(language_name(self.language), style="italic")
        table.add_column("ID", style="dim", no_wrap=True)

        for index, task in enumerate(tasks, start=1):
            mark = "[green]✓[/green]" if task.completed else "[dim]·[/dim]"
            text = escape(task.text)
            if task.completed:
                text = f"[strike dim]{text}[/strike dim]"
            row = [str(index), mark, text]
            if self.translating:
                row.append(escape(task.translations.get(self.language, "")))
            row.append(task.id)
            table.add_row(*row)
        return table

    def show_tasks(self) -> None:
        table = self.render_tasks()
        if table is None:
            self.console.print("[dim]No tasks yet. Type something to add one.[/dim]")
            return
        self.console.print(table)
        self.console.print(
            f"[dim]{self.store.active_count} active, "
            f"{self.store.completed_count} completed[/dim]"
        )

    async def process_input(self, user_input: str) -> None:
        """Process one line of user input.

        Args:
            user_input: The raw user input string
        """
        user_input = user_input.strip()

        if not user_input:
            return

        if user_input.startswith("/"):
            await self._handle_command(user_input)
        else:
            task = self.store.add(user_input)
            if task is not None:
                self.console.print(f"[green]Added[/green] {escape(task.text)}")

    async def _handle_command(self, user_input: str) -> None:
        """Handle slash command execution.

        Args:
            user_input: The command string starting with /
        """
        parts = user_input[1:].split(maxsplit=1)
        command_name = parts[0] if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        command = self.command_registry.get(command_name)
        if command is None:
            self.console.print(f"[red]Unknown command: /{escape(command_name)}[/red]")
            self.console.print("[dim]Type /help to see available commands[/dim]")
            return

        logger.debug("executing_command", command=command.name, args=args)
        try:
            await command.execute(args, self)
            logger.debug("command_completed", command=command.name)
        except Exception as e:
            logger.error("command_failed", command=command.name, error=str(e))
            self.console.print(f"[red]Error executing command: {escape(str(e))}[/red]")

    async def run(self) -> None:
        """Run the main application loop."""
        configure_logging(self._settings)
        logger.info("app_starting", app_name=self._settings.app_name)

        self.store.load()
        self.show_tasks()

        session: PromptSession[str] = PromptSession(
            history=InMemoryHistory(),
            completer=SlashCommandCompleter(self.command_registry.get_completions()),
        )

        while not self.should_exit:
            try:
                text = await session.prompt_async("todo> ")
            except (EOFError, KeyboardInterrupt):
                break
            await self.process_input(text)

        logger.info("app_ending")
        self.console.print("[dim]Goodbye![/dim]")
