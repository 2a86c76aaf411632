"""Commands of the todo list domain and their decoding from JSON objects."""

import json
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Union

from eventhorizon.core import NIL_UUID

AGGREGATE_TYPE = "todolist"

CREATE_COMMAND = "todolist:create"
DELETE_COMMAND = "todolist:delete"

ADD_ITEM_COMMAND = "todolist:add_item"
REMOVE_ITEM_COMMAND = "todolist:remove_item"
REMOVE_COMPLETED_ITEMS_COMMAND = "todolist:remove_completed_items"

SET_ITEM_DESCRIPTION_COMMAND = "todolist:set_item_description"
CHECK_ITEM_COMMAND = "todolist:check_item"
CHECK_ALL_ITEMS_COMMAND = "todolist:check_all_items"


class CommandNotRegisteredError(LookupError):
    """Raised when no command is registered for a command type."""

    def __init__(self, command_type: str) -> None:
        super().__init__(f"command not registered: {command_type}")
        self.command_type = command_type


class CommandDecodeError(ValueError):
    """Raised when a payload cannot be decoded into a command."""


def _json_field(name: str, default: Any) -> Any:
    return field(default=default, metadata={"json": name})


def _decode(value: Any, kind: type, key: str) -> Any:
    if kind is uuid.UUID:
        if not isinstance(value, str):
            raise CommandDecodeError(f"field {key!r}: expected a UUID string")
        try:
            return uuid.UUID(value)
        except ValueError as exc:
            raise CommandDecodeError(f"field {key!r}: invalid UUID: {exc}") from exc
    if kind is bool:
        if not isinstance(value, bool):
            raise CommandDecodeError(f"field {key!r}: expected a boolean")
        return value
    if kind is int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise CommandDecodeError(f"field {key!r}: expected an integer")
        return value
    if not isinstance(value, str):
        raise CommandDecodeError(f"field {key!r}: expected a string")
    return value


@dataclass
class _TodoCommand:
    command_type: ClassVar[str]

    id: uuid.UUID = _json_field("id", NIL_UUID)

    @property
    def aggregate_type(self) -> str:
        return AGGREGATE_TYPE

    @property
    def aggregate_id(self) -> uuid.UUID:
        return self.id

    @classmethod
    def _from_mapping(cls, payload: Mapping) -> "_TodoCommand":
        by_name = {f.metadata["json"]: f for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in payload.items():
            match = by_name.get(key)
            if match is None:
                folded = str(key).casefold()
                match = next(
                    (f for name, f in by_name.items() if name.casefold() == folded),
                    None,
                )
            if match is None or value is None:
                continue
            values[match.name] = _decode(value, match.type, str(key))
        return cls(**values)


@dataclass
class Create(_TodoCommand):
    """Creates a new todo list."""

    command_type: ClassVar[str] = CREATE_COMMAND


@dataclass
class Delete(_TodoCommand):
    """Deletes a todo list."""

    command_type: ClassVar[str] = DELETE_COMMAND


@dataclass
class AddItem(_TodoCommand):
    """Adds a todo item."""

    command_type: ClassVar[str] = ADD_ITEM_COMMAND

    description: str = _json_field("desc", "")


@dataclass
class RemoveItem(_TodoCommand):
    """Removes a todo item."""

    command_type: ClassVar[str] = REMOVE_ITEM_COMMAND

    item_id: int = _json_field("item_id", 0)


@dataclass
class RemoveCompletedItems(_TodoCommand):
    """Removes all completed todo items."""

    command_type: ClassVar[str] = REMOVE_COMPLETED_ITEMS_COMMAND


@dataclass
class SetItemDescription(_TodoCommand):
    """Sets the description of a todo item."""

    command_type: ClassVar[str] = SET_ITEM_DESCRIPTION_COMMAND

    item_id: int = _json_field("item_id", 0)
    description: str = _json_field("desc", "")


@dataclass
class CheckItem(_TodoCommand):
    """Sets the checked status of a todo item."""

    command_type: ClassVar[str] = CHECK_ITEM_COMMAND

    item_id: int = _json_field("item_id", 0)
    checked: bool = _json_field("checked", False)


@dataclass
class CheckAllItems(_TodoCommand):
    """Sets the checked status of all todo items."""

    command_type: ClassVar[str] = CHECK_ALL_ITEMS_COMMAND

    checked: bool = _json_field("checked", False)


_COMMANDS: dict[str, type[_TodoCommand]] = {
    cls.command_type: cls
    for cls in (
        Create,
        Delete,
        AddItem,
        RemoveItem,
        RemoveCompletedItems,
        SetItemDescription,
        CheckItem,
        CheckAllItems,
    )
}

COMMAND_TYPES = tuple(_COMMANDS)


def create_command(
    command_type: str, payload: Union[Mapping, str, bytes, None] = None
) -> _TodoCommand:
    """Create a command of a type, filled from a JSON object or its text.

    Unknown keys and null values are ignored; keys match field names
    case-insensitively when there is no exact match.
    """
    try:
        cls = _COMMANDS[command_type]
    except KeyError:
        raise CommandNotRegisteredError(command_type) from None

    if isinstance(payload, (str, bytes, bytearray)):
        try:
            payload = json.loads(payload)
        except ValueError as exc:
            raise CommandDecodeError(f"invalid JSON: {exc}") from exc
    if payload is None:
        return cls()
    if not isinstance(payload, Mapping):
        raise CommandDecodeError("expected a JSON object")
    return cls._from_mapping(payload)