"""Read model of the todo list domain."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from eventhorizon.core import NIL_UUID

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _format_timestamp(moment: datetime) -> str:
    """Format as RFC 3339 with trailing fractional zeros removed."""
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _dumps(value: Any) -> str:
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escape in _HTML_ESCAPES.items():
        text = text.replace(char, escape)
    return text


@dataclass
class TodoItem:
    """An item of a todo list that can be completed."""

    id: int = 0
    description: str = ""
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "desc": self.description, "completed": self.completed}


@dataclass
class TodoList:
    """The read model of a todo list."""

    id: uuid.UUID = NIL_UUID
    version: int = 0
    items: list[TodoItem] = field(default_factory=list)
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME

    @property
    def entity_id(self) -> uuid.UUID:
        return self.id

    @property
    def aggregate_version(self) -> int:
        return self.version

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "version": self.version,
            "items": [item.to_dict() for item in self.items],
            "created_at": _format_timestamp(self.created_at),
            "updated_at": _format_timestamp(self.updated_at),
        }

    def to_json(self) -> str:
        """Return the compact JSON representation."""
        return _dumps(self.to_dict())