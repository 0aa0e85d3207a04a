"""Task data model and its storage record format."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z' for UTC.

    Naive timestamps are taken to be UTC.
    """
    if not isinstance(value, str):
        raise TypeError(f"Expected ISO timestamp string, got {type(value).__name__}")
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ISO-8601 with millisecond precision and a 'Z' suffix."""
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Task:
    """A single to-do item."""

    id: str
    text: str
    completed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    translations: dict[str, str] = field(default_factory=dict)

    def copy(self) -> "Task":
        """Detached copy; mutating it never touches the original."""
        return Task(
            id=self.id,
            text=self.text,
            completed=self.completed,
            created_at=self.created_at,
            translations=dict(self.translations),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": format_timestamp(self.created_at),
        }
        if self.translations:
            data["translations"] = dict(self.translations)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Build a Task from a storage record.

        Raises:
            KeyError: A required field is missing.
            TypeError: A field has the wrong type.
            ValueError: The text is empty or the timestamp is unparseable.
        """
        task_id = data["id"]
        text = data["text"]
        if not isinstance(task_id, str) or not isinstance(text, str):
            raise TypeError("Task id and text must be strings")
        if not text.strip():
            raise ValueError(f"Task {task_id} has empty text")

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise TypeError(f"Task {task_id} has a non-boolean completed flag")

        translations = data.get("translations") or {}
        if not isinstance(translations, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in translations.items()
        ):
            raise TypeError(f"Task {task_id} has malformed translations")

        return cls(
            id=task_id,
            text=text,
            completed=completed,
            created_at=parse_timestamp(data["createdAt"]),
            translations=dict(translations),
        )
