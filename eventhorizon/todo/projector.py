"""Projector of todo list events onto the todo list read model."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

from eventhorizon.core import Event
from eventhorizon.todo.commands import AGGREGATE_TYPE
from eventhorizon.todo.events import (
    ItemAddedData,
    ItemCheckedData,
    ItemDescriptionSetData,
    ItemRemovedData,
)
from eventhorizon.todo.model import TodoItem, TodoList


class ProjectionError(Exception):
    """Raised when an event cannot be projected onto a model."""


class TodoProjector:
    """Projects todo list events onto a TodoList."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self.clock = clock

    @property
    def projector_type(self) -> str:
        return AGGREGATE_TYPE

    @staticmethod
    def _data(event: Event, kind: type) -> Any:
        if not isinstance(event.data, kind):
            raise ProjectionError("invalid event data")
        return event.data

    def project(self, event: Event, entity: Any) -> TodoList | None:
        """Apply an event to the model; None means the model is deleted."""
        if not isinstance(entity, TodoList):
            raise ProjectionError("model is of incorrect type")
        model = entity

        match event.event_type:
            case "todolist:created":
                model.id = event.aggregate_id
                model.items = []
                model.created_at = self.clock()
            case "todolist:deleted":
                return None
            case "todolist:item_added":
                data = self._data(event, ItemAddedData)
                model.items.append(TodoItem(id=data.item_id, description=data.description))
            case "todolist:item_removed":
                data = self._data(event, ItemRemovedData)
                for index, item in enumerate(model.items):
                    if item.id == data.item_id:
                        del model.items[index]
                        break
            case "todolist:item_description_set":
                data = self._data(event, ItemDescriptionSetData)
                for item in model.items:
                    if item.id == data.item_id:
                        item.description = data.description
            case "todolist:item_checked":
                data = self._data(event, ItemCheckedData)
                for item in model.items:
                    if item.id == data.item_id:
                        item.completed = data.checked
            case _:
                raise ProjectionError(f"could not project event: {event.event_type}")

        model.version += 1
        model.updated_at = self.clock()
        return model