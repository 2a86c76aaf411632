"""Event types and event data of the todo list domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

CREATED = "todolist:created"
DELETED = "todolist:deleted"

ITEM_ADDED = "todolist:item_added"
ITEM_REMOVED = "todolist:item_removed"

ITEM_DESCRIPTION_SET = "todolist:item_description_set"
ITEM_CHECKED = "todolist:item_checked"

EVENT_TYPES = (
    CREATED,
    DELETED,
    ITEM_ADDED,
    ITEM_REMOVED,
    ITEM_DESCRIPTION_SET,
    ITEM_CHECKED,
)


class EventDataNotRegisteredError(LookupError):
    """Raised when an event type carries no registered data."""

    def __init__(self, event_type: str) -> None:
        super().__init__(f"event data not registered: {event_type}")
        self.event_type = event_type


@dataclass
class ItemAddedData:
    """Data of the item added event."""

    item_id: int = 0
    description: str = ""


@dataclass
class ItemRemovedData:
    """Data of the item removed event."""

    item_id: int = 0


@dataclass
class ItemDescriptionSetData:
    """Data of the item description set event."""

    item_id: int = 0
    description: str = ""


@dataclass
class ItemCheckedData:
    """Data of the item checked event."""

    item_id: int = 0
    checked: bool = False


_EVENT_DATA: dict[str, Callable[[], object]] = {
    ITEM_ADDED: ItemAddedData,
    ITEM_REMOVED: ItemRemovedData,
    ITEM_DESCRIPTION_SET: ItemDescriptionSetData,
    ITEM_CHECKED: ItemCheckedData,
}


def create_event_data(event_type: str) -> object:
    """Return a new, empty data object for an event type."""
    try:
        factory = _EVENT_DATA[event_type]
    except KeyError:
        raise EventDataNotRegisteredError(event_type) from None
    return factory()