"""Saga that confirms accepted invites until the guest limit is reached."""

from __future__ import annotations

import threading
import uuid

from eventhorizon.core import CommandHandler, Event
from eventhorizon.guestlist.commands import ConfirmInvite, DenyInvite
from eventhorizon.guestlist.events import INVITE_ACCEPTED_EVENT

RESPONSE_SAGA_TYPE = "ResponseSaga"


class ResponseSaga:
    """Confirms accepted invites while there is room and denies the rest."""

    def __init__(self, guest_limit: int) -> None:
        self.guest_limit = guest_limit
        self._accepted: set[uuid.UUID] = set()
        self._lock = threading.Lock()

    @property
    def saga_type(self) -> str:
        return RESPONSE_SAGA_TYPE

    @property
    def accepted_guests(self) -> frozenset[uuid.UUID]:
        """The guests whose acceptance has been confirmed."""
        with self._lock:
            return frozenset(self._accepted)

    def run_saga(self, event: Event, handler: CommandHandler) -> None:
        """React to an event by issuing commands to the handler."""
        if event.event_type != INVITE_ACCEPTED_EVENT:
            return

        guest = event.aggregate_id
        with self._lock:
            if guest in self._accepted:
                return
            full = len(self._accepted) >= self.guest_limit
            if not full:
                self._accepted.add(guest)

        if full:
            handler.handle_command(DenyInvite(id=guest))
        else:
            handler.handle_command(ConfirmInvite(id=guest))