"""Built-in slash commands for the CLI."""

from typing import Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from todo_lingo.cli.commands import Command, CommandCategory, CommandRegistry
from todo_lingo.service import translate_tasks
from todo_lingo.translation.languages import (
    SUPPORTED_LANGUAGES,
    is_supported,
    language_name,
)


class HelpCommand(Command):
    """Display help information about available commands."""

    def __init__(self) -> None:
        super().__init__(
            name="help",
            description="Show available commands and usage information",
            usage="/help [command]",
            examples=["/help", "/help translate"],
            category=CommandCategory.GENERAL,
        )

    async def execute(self, args: str, app: Any) -> None:
        """Display help information."""
        name = args.strip().lstrip("/")
        if name:
            command = app.command_registry.get(name)
            if command is None:
                app.console.print(f"[red]Unknown command: /{escape(name)}[/red]")
                return
            app.console.print(command.get_help())
            return

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Command", style="bold cyan", no_wrap=True)
        table.add_column("Aliases", style="dim", no_wrap=True)
        table.add_column("Description")

        for category in CommandCategory:
            for cmd in sorted(app.command_registry.by_category(category), key=lambda c: c.name):
                aliases = ", ".join(f"/{a}" for a in cmd.aliases) if cmd.aliases else ""
                table.add_row(f"/{cmd.name}", aliases, cmd.description)

        panel = Panel(table, title="[bold]Available Commands[/bold]", border_style="cyan")
        app.console.print(panel)
        app.console.print("[dim]Anything not starting with / is added as a task.[/dim]")


class ExitCommand(Command):
    """Exit the application."""

    def __init__(self) -> None:
        super().__init__(
            name="exit",
            description="Exit the application",
            aliases=["quit"],
            category=CommandCategory.GENERAL,
        )

    async def execute(self, args: str, app: Any) -> None:
        app.stop()


class ListCommand(Command):
    """Show the task list."""

    def __init__(self) -> None:
        super().__init__(
            name="list",
            description="Show all tasks",
            aliases=["ls"],
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        app.show_tasks()


class AddCommand(Command):
    """Add a task."""

    def __init__(self) -> None:
        super().__init__(
            name="add",
            description="Add a task",
            usage="/add <text>",
            examples=["/add Buy milk"],
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        task = app.store.add(args)
        if task is None:
            app.console.print("[yellow]Task text cannot be empty[/yellow]")
            return
        app.console.print(f"[green]Added[/green] {escape(task.text)}")


class ToggleCommand(Command):
    """Mark a task done, or undone."""

    def __init__(self) -> None:
        super().__init__(
            name="done",
            description="Toggle a task between active and completed",
            aliases=["toggle"],
            usage="/done <number|id>",
            examples=["/done 1", "/done 3f2a9c0d81b4"],
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        task = app.resolve_task(args)
        if task is None:
            app.console.print(f"[red]No task '{escape(args.strip())}'[/red]")
            return
        app.store.toggle(task.id)
        state = "active" if task.completed else "completed"
        app.console.print(f"{escape(task.text)} [dim]is now {state}[/dim]")


class DeleteCommand(Command):
    """Delete a task."""

    def __init__(self) -> None:
        super().__init__(
            name="delete",
            description="Delete a task",
            aliases=["rm"],
            usage="/delete <number|id>",
            examples=["/delete 2"],
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        task = app.resolve_task(args)
        if task is None:
            app.console.print(f"[red]No task '{escape(args.strip())}'[/red]")
            return
        app.store.delete(task.id)
        app.console.print(f"[yellow]Deleted[/yellow] {escape(task.text)}")


class ClearCompletedCommand(Command):
    """Remove completed tasks."""

    def __init__(self) -> None:
        super().__init__(
            name="clear",
            description="Remove all completed tasks",
            category=CommandCategory.TASKS,
        )

    async def execute(self, args: str, app: Any) -> None:
        removed = app.store.clear_completed()
        app.console.print(f"Removed {removed} completed task{'s' if removed != 1 else ''}")


class LanguageCommand(Command):
    """Show or change the translation language."""

    def __init__(self) -> None:
        super().__init__(
            name="lang",
            description="Show or set the translation language",
            usage="/lang [code]",
            examples=["/lang", "/lang fr", "/lang zh-CN"],
            category=CommandCategory.TRANSLATION,
        )

    async def execute(self, args: str, app: Any) -> None:
        code = args.strip()
        if not code:
            if not app.translating:
                app.console.print("Translation is off")
                return
            app.console.print(
                f"Translating into [bold]{language_name(app.language)}[/bold] ({app.language})"
            )
            return
        if not is_supported(code):
            app.console.print(f"[red]Unsupported language: {escape(code)}[/red]")
            app.console.print("[dim]Type /languages to see supported codes[/dim]")
            return
        app.set_language(code)
        if not app.translating:
            app.console.print("Translation is off; tasks are shown as written")
            return
        app.console.print(f"Translating into [bold]{language_name(code)}[/bold]")


class LanguagesCommand(Command):
    """List supported languages."""

    def __init__(self) -> None:
        super().__init__(
            name="languages",
            description="List supported translation languages",
            category=CommandCategory.TRANSLATION,
        )

    async def execute(self, args: str, app: Any) -> None:
        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Code", style="bold cyan", no_wrap=True)
        table.add_column("Language")
        for code, name in sorted(SUPPORTED_LANGUAGES.items(), key=lambda item: item[1]):
            table.add_row(code, name)
        app.console.print(Panel(table, title="[bold]Languages[/bold]", border_style="cyan"))


class TranslateCommand(Command):
    """Translate every task into the selected language."""

    def __init__(self) -> None:
        super().__init__(
            name="translate",
            description="Translate all tasks (into the selected or given language)",
            aliases=["tr"],
            usage="/translate [code]",
            examples=["/translate", "/translate de"],
            category=CommandCategory.TRANSLATION,
        )

    async def execute(self, args: str, app: Any) -> None:
        code = args.strip() or app.language
        if not is_supported(code):
            app.console.print(f"[red]Unsupported language: {escape(code)}[/red]")
            return
        if code == app.source_language:
            app.console.print(
                f"[dim]Tasks are already in {language_name(code)}; nothing to translate[/dim]"
            )
            return
        if len(app.store) == 0:
            app.console.print("[dim]Nothing to translate[/dim]")
            return
        with app.console.status(f"Translating into {language_name(code)}..."):
            results = await translate_tasks(
                app.store, app.client, code, source_lang=app.source_language
            )
        app.language = code
        app.console.print(f"Translated {len(results)} task{'s' if len(results) != 1 else ''}")
        app.show_tasks()


class ClearCacheCommand(Command):
    """Drop cached translations."""

    def __init__(self) -> None:
        super().__init__(
            name="clear-cache",
            description="Clear the translation cache",
            category=CommandCategory.TRANSLATION,
        )

    async def execute(self, args: str, app: Any) -> None:
        app.client.clear_cache()
        app.console.print("Translation cache cleared")


BUILTIN_COMMANDS: tuple[type[Command], ...] = (
    HelpCommand,
    ExitCommand,
    ListCommand,
    AddCommand,
    ToggleCommand,
    DeleteCommand,
    ClearCompletedCommand,
    LanguageCommand,
    LanguagesCommand,
    TranslateCommand,
    ClearCacheCommand,
)


def register_builtin_commands(registry: CommandRegistry) -> None:
    """Register every built-in command on a registry."""
    for command_cls in BUILTIN_COMMANDS:
        registry.register(command_cls())
