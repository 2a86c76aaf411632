"""Event sourced invitation aggregate of the guest list domain."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Callable

from eventhorizon.core import AggregateBase, Event
from eventhorizon.guestlist.commands import (
    INVITATION_AGGREGATE_TYPE,
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

log = logging.getLogger(__name__)


class InvitationError(Exception):
    """Raised when the invitation aggregate rejects a command."""


class InvitationAggregate(AggregateBase):
    """An invitation that can be accepted or declined, but not both."""

    def __init__(
        self,
        entity_id: uuid.UUID,
        *,
        version: int = 0,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__(INVITATION_AGGREGATE_TYPE, entity_id, version)
        self.name = ""
        self.age = 0
        self.accepted = False
        self.declined = False
        self.confirmed = False
        self.denied = False
        self.clock = clock

    def _emit(self, event_type: str, data: Any = None) -> None:
        self.append_event(event_type, data, self.clock())

    def _require_invitee(self) -> None:
        if not self.name:
            raise InvitationError("invitee does not exist")

    def handle_command(self, cmd: Any) -> None:
        """Validate a command and record the resulting events."""
        match cmd:
            case CreateInvite():
                self._emit(INVITE_CREATED_EVENT, InviteCreatedData(cmd.name, cmd.age))
            case AcceptInvite():
                self._require_invitee()
                if self.declined:
                    raise InvitationError(f"{self.name} already declined")
                if not self.accepted:
                    self._emit(INVITE_ACCEPTED_EVENT)
            case DeclineInvite():
                self._require_invitee()
                if self.accepted:
                    raise InvitationError(f"{self.name} already accepted")
                if not self.declined:
                    self._emit(INVITE_DECLINED_EVENT)
            case ConfirmInvite():
                self._require_invitee()
                if not self.accepted or self.declined:
                    raise InvitationError("only accepted invites can be confirmed")
                self._emit(INVITE_CONFIRMED_EVENT)
            case DenyInvite():
                self._require_invitee()
                if not self.accepted or self.declined:
                    raise InvitationError("only accepted invites can be denied")
                self._emit(INVITE_DENIED_EVENT)
            case _:
                raise InvitationError("couldn't handle command")

    def apply_event(self, event: Event) -> None:
        """Update the aggregate state from an event; unknown events are ignored."""
        match event.event_type:
            case "InviteCreated":
                if isinstance(event.data, InviteCreatedData):
                    self.name = event.data.name
                    self.age = event.data.age
                else:
                    log.warning("invalid event data type: %r", event.data)
            case "InviteAccepted":
                self.accepted = True
            case "InviteDeclined":
                self.declined = True
            case "InviteConfirmed":
                self.confirmed = True
            case "InviteDenied":
                self.denied = True