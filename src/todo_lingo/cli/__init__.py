"""Command-line interface for todo-lingo."""

from todo_lingo.cli.app import SlashCommandCompleter, TodoCLIApp
from todo_lingo.cli.commands import (
    Command,
    CommandCategory,
    CommandRegistry,
)

__all__ = [
    "TodoCLIApp",
    "SlashCommandCompleter",
    "Command",
    "CommandCategory",
    "CommandRegistry",
]
