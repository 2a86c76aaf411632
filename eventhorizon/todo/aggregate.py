"""Event sourced aggregate of the todo list domain."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Callable, Iterable

from eventhorizon.core import AggregateBase, Event
from eventhorizon.todo.commands import (
    AGGREGATE_TYPE,
    AddItem,
    CheckAllItems,
    CheckItem,
    Create,
    Delete,
    RemoveCompletedItems,
    RemoveItem,
    SetItemDescription,
)
from eventhorizon.todo.events import (
    CREATED,
    DELETED,
    ITEM_ADDED,
    ITEM_CHECKED,
    ITEM_DESCRIPTION_SET,
    ITEM_REMOVED,
    ItemAddedData,
    ItemCheckedData,
    ItemDescriptionSetData,
    ItemRemovedData,
)
from eventhorizon.todo.model import TodoItem


class TodoError(Exception):
    """Raised when the todo aggregate rejects a command or an event."""


class ItemNotFoundError(TodoError, LookupError):
    """Raised when a command refers to an item the list does not hold."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"item does not exist: {item_id}")
        self.item_id = item_id


class TodoAggregate(AggregateBase):
    """A todo list that turns commands into events and applies them."""

    def __init__(
        self,
        entity_id: uuid.UUID,
        *,
        version: int = 0,
        created: bool = False,
        next_item_id: int = 0,
        items: Iterable[TodoItem] = (),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(AGGREGATE_TYPE, entity_id, version)
        self.created = created
        self.next_item_id = next_item_id
        self.items: list[TodoItem] = list(items)
        self.clock = clock

    def _find_item(self, item_id: int) -> TodoItem:
        item = next((i for i in self.items if i.id == item_id), None)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def _emit(self, event_type: str, data: Any) -> None:
        self.append_event(event_type, data, self.clock())

    def handle_command(self, cmd: Any) -> None:
        """Validate a command and record the resulting events."""
        if isinstance(cmd, Create):
            if self.created:
                raise TodoError("already created")
        elif not self.created:
            raise TodoError("not created")

        match cmd:
            case Create():
                self._emit(CREATED, None)
            case Delete():
                self._emit(DELETED, None)
            case AddItem():
                self._emit(
                    ITEM_ADDED,
                    ItemAddedData(item_id=self.next_item_id, description=cmd.description),
                )
            case RemoveItem():
                self._find_item(cmd.item_id)
                self._emit(ITEM_REMOVED, ItemRemovedData(item_id=cmd.item_id))
            case RemoveCompletedItems():
                for item in self.items:
                    if item.completed:
                        self._emit(ITEM_REMOVED, ItemRemovedData(item_id=item.id))
            case SetItemDescription():
                item = self._find_item(cmd.item_id)
                if item.description == cmd.description:
                    return
                self._emit(
                    ITEM_DESCRIPTION_SET,
                    ItemDescriptionSetData(item_id=cmd.item_id, description=cmd.description),
                )
            case CheckItem():
                item = self._find_item(cmd.item_id)
                if item.completed == cmd.checked:
                    return
                self._emit(ITEM_CHECKED, ItemCheckedData(item_id=cmd.item_id, checked=cmd.checked))
            case CheckAllItems():
                for item in self.items:
                    if item.completed != cmd.checked:
                        self._emit(
                            ITEM_CHECKED, ItemCheckedData(item_id=item.id, checked=cmd.checked)
                        )
            case _:
                command_type = getattr(cmd, "command_type", type(cmd).__name__)
                raise TodoError(f"could not handle command: {command_type}")

    @staticmethod
    def _data(event: Event, kind: type) -> Any:
        if not isinstance(event.data, kind):
            raise TodoError("invalid event data")
        return event.data

    def apply_event(self, event: Event) -> None:
        """Update the aggregate state from an event."""
        match event.event_type:
            case "todolist:created":
                self.created = True
            case "todolist:deleted":
                self.created = False
            case "todolist:item_added":
                data = self._data(event, ItemAddedData)
                self.items.append(TodoItem(id=data.item_id, description=data.description))
                self.next_item_id += 1
            case "todolist:item_removed":
                data = self._data(event, ItemRemovedData)
                for index, item in enumerate(self.items):
                    if item.id == data.item_id:
                        del self.items[index]
                        break
            case "todolist:item_description_set":
                data = self._data(event, ItemDescriptionSetData)
                for item in self.items:
                    if item.id == data.item_id:
                        item.description = data.description
            case "todolist:item_checked":
                data = self._data(event, ItemCheckedData)
                for item in self.items:
                    if item.id == data.item_id:
                        item.completed = data.checked
            case _:
                raise TodoError(f"could not apply event: {event.event_type}")