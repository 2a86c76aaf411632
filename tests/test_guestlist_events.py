from datetime import datetime

import pytest

from eventhorizon.core import MatchEvents, new_event
from eventhorizon.guestlist.events import (
    EVENT_TYPES,
    INVITE_ACCEPTED_EVENT,
    INVITE_CONFIRMED_EVENT,
    INVITE_CREATED_EVENT,
    INVITE_DECLINED_EVENT,
    INVITE_DENIED_EVENT,
    EventDataNotRegisteredError,
    InviteCreatedData,
    create_event_data,
)

NOW = datetime(2017, 7, 10, 23, 0, 0)


@pytest.mark.parametrize(
    "event_type, name",
    [
        (INVITE_CREATED_EVENT, "InviteCreated"),
        (INVITE_ACCEPTED_EVENT, "InviteAccepted"),
        (INVITE_DECLINED_EVENT, "InviteDeclined"),
        (INVITE_CONFIRMED_EVENT, "InviteConfirmed"),
        (INVITE_DENIED_EVENT, "InviteDenied"),
    ],
)
def test_event_type_names(event_type, name):
    event = new_event(event_type, None, NOW)
    assert str(event) == name
    assert MatchEvents(name).match(event)


def test_event_types_are_distinct():
    assert len(set(EVENT_TYPES)) == len(EVENT_TYPES)
    for event_type in EVENT_TYPES:
        event = new_event(event_type, None, NOW)
        others = [t for t in EVENT_TYPES if t != event_type]
        assert not MatchEvents(*others).match(event)
        assert MatchEvents(*EVENT_TYPES).match(event)


def test_create_event_data_for_created():
    data = create_event_data(INVITE_CREATED_EVENT)
    assert data == InviteCreatedData()


def test_create_event_data_returns_fresh_objects():
    first = create_event_data(INVITE_CREATED_EVENT)
    second = create_event_data(INVITE_CREATED_EVENT)
    first.name = "Athena"
    assert second.name != first.name


@pytest.mark.parametrize(
    "event_type",
    [INVITE_ACCEPTED_EVENT, INVITE_DECLINED_EVENT, INVITE_CONFIRMED_EVENT, INVITE_DENIED_EVENT, "other"],
)
def test_create_event_data_unregistered(event_type):
    with pytest.raises(EventDataNotRegisteredError) as info:
        create_event_data(event_type)
    assert info.value.event_type == event_type


def test_invite_created_data_fields():
    data = InviteCreatedData("Athena", 42)
    assert (data.name, data.age) == ("Athena", 42)