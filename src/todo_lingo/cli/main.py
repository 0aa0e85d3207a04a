"""Console entry point for todo-lingo."""

import asyncio
import sys

from rich.console import Console

from todo_lingo.cli.app import TodoCLIApp
from todo_lingo.config import SettingsValidationError, get_settings, validate_settings


def main() -> int:
    """Run the interactive task list."""
    console = Console()
    settings = get_settings()
    try:
        validate_settings(settings)
    except SettingsValidationError as e:
        console.print(f"[red]Invalid configuration:[/red]\n{e}")
        return 1

    settings.ensure_workspace_exists()
    app = TodoCLIApp(settings=settings, console=console)
    asyncio.run(app.run())
    return 0


if __name__ == "__main__":
    sys.exit(main())
