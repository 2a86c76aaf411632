"""Event types and event data of the guest list domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

INVITE_CREATED_EVENT = "InviteCreated"

INVITE_ACCEPTED_EVENT = "InviteAccepted"
INVITE_DECLINED_EVENT = "InviteDeclined"

INVITE_CONFIRMED_EVENT = "InviteConfirmed"
INVITE_DENIED_EVENT = "InviteDenied"

EVENT_TYPES = (
    INVITE_CREATED_EVENT,
    INVITE_ACCEPTED_EVENT,
    INVITE_DECLINED_EVENT,
    INVITE_CONFIRMED_EVENT,
    INVITE_DENIED_EVENT,
)


class EventDataNotRegisteredError(LookupError):
    """Raised when an event type carries no registered data."""

    def __init__(self, event_type: str) -> None:
        super().__init__(f"event data not registered: {event_type}")
        self.event_type = event_type


@dataclass
class InviteCreatedData:
    """Data of the invite created event."""

    name: str = ""
    age: int = 0


# Only the event for creating an invite has custom data.
_EVENT_DATA: dict[str, Callable[[], object]] = {
    INVITE_CREATED_EVENT: InviteCreatedData,
}


def create_event_data(event_type: str) -> object:
    """Return a new, empty data object for an event type."""
    try:
        factory = _EVENT_DATA[event_type]
    except KeyError:
        raise EventDataNotRegisteredError(event_type) from None
    return factory()