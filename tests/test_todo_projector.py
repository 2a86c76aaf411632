import uuid
from datetime import datetime, timezone

import pytest

from eventhorizon.core import for_aggregate, new_event
from eventhorizon.todo.commands import AGGREGATE_TYPE
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
from eventhorizon.todo.model import TodoItem, TodoList
from eventhorizon.todo.projector import ProjectionError, TodoProjector

NOW = datetime(2017, 7, 10, 23, 0, 0, tzinfo=timezone.utc)
ID = uuid.UUID("7c1d2e3f-4a5b-4c6d-8e7f-0a1b2c3d4e5f")


def ev(event_type, data):
    return new_event(event_type, data, NOW, for_aggregate(AGGREGATE_TYPE, ID, 1))


def items(*specs):
    return [TodoItem(id=i, description=d, completed=c) for i, d, c in specs]


def projector():
    return TodoProjector(clock=lambda: NOW)


CASES = {
    "created": (
        lambda: TodoList(),
        ev(CREATED, None),
        TodoList(id=ID, version=1, items=[], created_at=NOW, updated_at=NOW),
    ),
    "deleted": (lambda: TodoList(), ev(DELETED, None), None),
    "item added": (
        lambda: TodoList(id=ID, version=1, items=[], created_at=NOW),
        ev(ITEM_ADDED, ItemAddedData(item_id=1, description="desc 1")),
        TodoList(
            id=ID, version=2, items=items((1, "desc 1", False)), created_at=NOW, updated_at=NOW
        ),
    ),
    "item removed": (
        lambda: TodoList(
            id=ID,
            version=1,
            items=items((1, "desc 1", False), (2, "desc 2", False)),
            created_at=NOW,
        ),
        ev(ITEM_REMOVED, ItemRemovedData(item_id=2)),
        TodoList(
            id=ID, version=2, items=items((1, "desc 1", False)), created_at=NOW, updated_at=NOW
        ),
    ),
    "item removed (last)": (
        lambda: TodoList(id=ID, version=1, items=items((1, "desc 1", False)), created_at=NOW),
        ev(ITEM_REMOVED, ItemRemovedData(item_id=1)),
        TodoList(id=ID, version=2, items=[], created_at=NOW, updated_at=NOW),
    ),
    "item description set": (
        lambda: TodoList(
            id=ID,
            version=1,
            items=items((1, "desc 1", False), (2, "desc 2", False)),
            created_at=NOW,
        ),
        ev(ITEM_DESCRIPTION_SET, ItemDescriptionSetData(item_id=2, description="new desc")),
        TodoList(
            id=ID,
            version=2,
            items=items((1, "desc 1", False), (2, "new desc", False)),
            created_at=NOW,
            updated_at=NOW,
        ),
    ),
    "item checked": (
        lambda: TodoList(
            id=ID,
            version=1,
            items=items((1, "desc 1", False), (2, "desc 2", False)),
            created_at=NOW,
        ),
        ev(ITEM_CHECKED, ItemCheckedData(item_id=2, checked=True)),
        TodoList(
            id=ID,
            version=2,
            items=items((1, "desc 1", False), (2, "desc 2", True)),
            created_at=NOW,
            updated_at=NOW,
        ),
    ),
}


@pytest.mark.parametrize("name", list(CASES))
def test_project(name):
    build, event, expected = CASES[name]
    assert projector().project(event, build()) == expected


def test_unhandled_event_leaves_model_untouched():
    model = TodoList()
    with pytest.raises(ProjectionError) as excinfo:
        projector().project(ev("unknown", None), model)
    assert str(excinfo.value) == "could not project event: unknown"
    assert model == TodoList()


def test_incorrect_model_type_is_rejected():
    with pytest.raises(ProjectionError, match="^model is of incorrect type$"):
        projector().project(ev(CREATED, None), object())


def test_invalid_event_data_is_rejected():
    model = TodoList(id=ID, version=1)
    with pytest.raises(ProjectionError, match="^invalid event data$"):
        projector().project(ev(ITEM_CHECKED, ItemAddedData()), model)
    assert model.version == 1


def test_projector_type_is_aggregate_type():
    assert projector().projector_type == "todolist"


def test_sequence_of_events_builds_list():
    p = projector()
    model = p.project(ev(CREATED, None), TodoList())
    model = p.project(ev(ITEM_ADDED, ItemAddedData(item_id=0, description="desc")), model)
    assert model.to_dict() == {
        "id": str(ID),
        "version": 2,
        "items": [{"id": 0, "desc": "desc", "completed": False}],
        "created_at": "2017-07-10T23:00:00Z",
        "updated_at": "2017-07-10T23:00:00Z",
    }