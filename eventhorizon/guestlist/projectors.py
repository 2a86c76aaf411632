"""Read models and projectors of the guest list domain."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from typing import Any, Protocol

from eventhorizon.core import NIL_UUID, EntityNotFoundError, Event
from eventhorizon.guestlist.commands import INVITATION_AGGREGATE_TYPE
from eventhorizon.guestlist.events import (
    INVITE_ACCEPTED_EVENT,
    INVITE_CONFIRMED_EVENT,
    INVITE_CREATED_EVENT,
    INVITE_DECLINED_EVENT,
    INVITE_DENIED_EVENT,
    InviteCreatedData,
)

GUEST_LIST_HANDLER_TYPE = "projector_GuestList"

_STATUSES = {
    INVITE_ACCEPTED_EVENT: "accepted",
    INVITE_DECLINED_EVENT: "declined",
    INVITE_CONFIRMED_EVENT: "confirmed",
    INVITE_DENIED_EVENT: "denied",
}

_COUNTERS = {
    INVITE_ACCEPTED_EVENT: ("num_accepted", "num_guests"),
    INVITE_DECLINED_EVENT: ("num_declined", "num_guests"),
    INVITE_CONFIRMED_EVENT: ("num_confirmed",),
    INVITE_DENIED_EVENT: ("num_denied",),
}


class ProjectionError(Exception):
    """Raised when an event cannot be projected onto a read model."""


class ReadWriteRepo(Protocol):
    """A repository that finds entities by ID and saves them."""

    def find(self, entity_id: uuid.UUID) -> Any: ...

    def save(self, entity: Any) -> None: ...


@dataclass
class Invitation:
    """Read model of a single invitation."""

    id: uuid.UUID = NIL_UUID
    version: int = 0
    name: str = ""
    age: int = 0
    status: str = ""

    @property
    def entity_id(self) -> uuid.UUID:
        return self.id

    @property
    def aggregate_version(self) -> int:
        return self.version


class InvitationProjector:
    """Projects invitation events onto an Invitation."""

    @property
    def projector_type(self) -> str:
        return INVITATION_AGGREGATE_TYPE

    def project(self, event: Event, entity: Any) -> Invitation:
        """Apply an event to the invitation and bump its version."""
        if not isinstance(entity, Invitation):
            raise ProjectionError("model is of incorrect type")

        if event.event_type == INVITE_CREATED_EVENT:
            if not isinstance(event.data, InviteCreatedData):
                raise ProjectionError(f"projector: invalid event data type: {event.data!r}")
            entity.id = event.aggregate_id
            entity.name = event.data.name
            entity.age = event.data.age
        elif event.event_type in _STATUSES:
            entity.status = _STATUSES[event.event_type]
        else:
            raise ProjectionError(f"could not handle event: {event}")

        entity.version += 1
        return entity


@dataclass
class GuestList:
    """Read model counting the responses to all invitations of an event."""

    id: uuid.UUID = NIL_UUID
    num_guests: int = 0
    num_accepted: int = 0
    num_declined: int = 0
    num_confirmed: int = 0
    num_denied: int = 0

    @property
    def entity_id(self) -> uuid.UUID:
        return self.id


class GuestListProjector:
    """Event handler that keeps the guest list of one event up to date."""

    def __init__(self, repo: ReadWriteRepo, event_id: uuid.UUID) -> None:
        self.repo = repo
        self.event_id = event_id
        self._lock = threading.Lock()

    @property
    def handler_type(self) -> str:
        return GUEST_LIST_HANDLER_TYPE

    def _load(self) -> GuestList:
        try:
            found = self.repo.find(self.event_id)
        except EntityNotFoundError:
            return GuestList(id=self.event_id)
        if not isinstance(found, GuestList):
            raise ProjectionError("projector: incorrect entity type")
        return found

    def handle_event(self, event: Event) -> None:
        """Count a response to an invitation and save the guest list."""
        # Guests are counted under a lock so concurrent events do not race.
        with self._lock:
            guest_list = self._load()

            counters = _COUNTERS.get(event.event_type)
            if counters is None:
                raise ProjectionError(f"projector: unsupported event type: {event}")
            for name in counters:
                setattr(guest_list, name, getattr(guest_list, name) + 1)

            try:
                self.repo.save(guest_list)
            except Exception as exc:
                raise ProjectionError(f"projector: could not save: {exc}") from exc