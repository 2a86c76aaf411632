import logging
import uuid
from datetime import datetime, timezone

import pytest

from eventhorizon.core import for_aggregate, new_event
from eventhorizon.guestlist.aggregate import InvitationAggregate, InvitationError
from eventhorizon.guestlist.commands import (
    AcceptInvite,
    ConfirmInvite,
    CreateInvite,
    DeclineInvite,
    DenyInvite,
)
from eventhorizon.guestlist.events import (
    INVITE_ACCEPTED_EVENT,
    INVITE_CONFIRMED_EVENT,
    INVITE_CREATED_EVENT,
    INVITE_DECLINED_EVENT,
    INVITE_DENIED_EVENT,
    InviteCreatedData,
)

NOW = datetime(2017, 7, 10, 23, 0, tzinfo=timezone.utc)


def make(ident=None):
    return InvitationAggregate(ident or uuid.uuid4(), clock=lambda: NOW)


def run(agg, cmd):
    """Handle a command and apply and clear the events it produced."""
    agg.handle_command(cmd)
    events = agg.uncommitted_events()
    for event in events:
        agg.apply_event(event)
    agg.clear_uncommitted_events()
    return events


def created(name="Athena", age=42):
    agg = make()
    run(agg, CreateInvite(id=agg.entity_id, name=name, age=age))
    return agg


def test_create_emits_event():
    ident = uuid.uuid4()
    agg = make(ident)
    agg.handle_command(CreateInvite(id=ident, name="Athena", age=42))
    expected = new_event(
        INVITE_CREATED_EVENT,
        InviteCreatedData("Athena", 42),
        NOW,
        for_aggregate("Invitation", ident, 1),
    )
    assert agg.uncommitted_events() == [expected]


def test_apply_created_sets_name_and_age():
    agg = created("Athena", 42)
    assert (agg.name, agg.age) == ("Athena", 42)


@pytest.mark.parametrize("cmd_cls", [AcceptInvite, DeclineInvite, ConfirmInvite, DenyInvite])
def test_commands_need_invitee(cmd_cls):
    agg = make()
    with pytest.raises(InvitationError, match="invitee does not exist"):
        agg.handle_command(cmd_cls(id=agg.entity_id))
    assert agg.uncommitted_events() == []


def test_accept():
    agg = created()
    events = run(agg, AcceptInvite(id=agg.entity_id))
    assert [e.event_type for e in events] == [INVITE_ACCEPTED_EVENT]
    assert agg.accepted


def test_accept_twice_emits_nothing():
    agg = created()
    run(agg, AcceptInvite(id=agg.entity_id))
    assert run(agg, AcceptInvite(id=agg.entity_id)) == []


def test_decline_after_accept_fails():
    agg = created("Athena")
    run(agg, AcceptInvite(id=agg.entity_id))
    with pytest.raises(InvitationError, match="Athena already accepted"):
        agg.handle_command(DeclineInvite(id=agg.entity_id))
    assert agg.accepted and not agg.declined


def test_accept_after_decline_fails():
    agg = created("Zeus")
    run(agg, DeclineInvite(id=agg.entity_id))
    with pytest.raises(InvitationError, match="Zeus already declined"):
        agg.handle_command(AcceptInvite(id=agg.entity_id))


def test_decline_twice_emits_nothing():
    agg = created()
    events = run(agg, DeclineInvite(id=agg.entity_id))
    assert [e.event_type for e in events] == [INVITE_DECLINED_EVENT]
    assert run(agg, DeclineInvite(id=agg.entity_id)) == []


@pytest.mark.parametrize(
    "cmd_cls, message",
    [
        (ConfirmInvite, "only accepted invites can be confirmed"),
        (DenyInvite, "only accepted invites can be denied"),
    ],
)
def test_confirm_and_deny_need_acceptance(cmd_cls, message):
    agg = created()
    with pytest.raises(InvitationError, match=message):
        agg.handle_command(cmd_cls(id=agg.entity_id))
    run(agg, DeclineInvite(id=agg.entity_id))
    with pytest.raises(InvitationError, match=message):
        agg.handle_command(cmd_cls(id=agg.entity_id))


def test_confirm_accepted():
    agg = created()
    run(agg, AcceptInvite(id=agg.entity_id))
    events = run(agg, ConfirmInvite(id=agg.entity_id))
    assert [e.event_type for e in events] == [INVITE_CONFIRMED_EVENT]
    assert agg.confirmed and not agg.denied


def test_deny_accepted():
    agg = created()
    run(agg, AcceptInvite(id=agg.entity_id))
    events = run(agg, DenyInvite(id=agg.entity_id))
    assert [e.event_type for e in events] == [INVITE_DENIED_EVENT]
    assert agg.denied and not agg.confirmed


def test_unknown_command():
    agg = created()
    with pytest.raises(InvitationError, match="couldn't handle command"):
        agg.handle_command(object())


def test_versions_increase_with_uncommitted_events():
    agg = created()
    agg.handle_command(AcceptInvite(id=agg.entity_id))
    agg.apply_event(agg.uncommitted_events()[0])
    agg.handle_command(ConfirmInvite(id=agg.entity_id))
    assert [e.version for e in agg.uncommitted_events()] == [1, 2]


def test_apply_invalid_created_data_is_logged(caplog):
    caplog.set_level(logging.WARNING, logger="eventhorizon.guestlist.aggregate")
    agg = make()
    agg.apply_event(new_event(INVITE_CREATED_EVENT, None, NOW))
    assert agg.name == ""
    assert "invalid event data type" in caplog.text


def test_apply_unknown_event_is_ignored():
    agg = created("Athena")
    agg.apply_event(new_event("other", None, NOW))
    assert agg.name == "Athena"
    assert not any([agg.accepted, agg.declined, agg.confirmed, agg.denied])