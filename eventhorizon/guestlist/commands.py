"""Commands of the guest list domain."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import ClassVar

from eventhorizon.core import NIL_UUID

INVITATION_AGGREGATE_TYPE = "Invitation"

CREATE_INVITE_COMMAND = "CreateInvite"

ACCEPT_INVITE_COMMAND = "AcceptInvite"
DECLINE_INVITE_COMMAND = "DeclineInvite"

CONFIRM_INVITE_COMMAND = "ConfirmInvite"
DENY_INVITE_COMMAND = "DenyInvite"


@dataclass
class _InviteCommand:
    command_type: ClassVar[str]

    id: uuid.UUID = NIL_UUID

    @property
    def aggregate_id(self) -> uuid.UUID:
        return self.id

    @property
    def aggregate_type(self) -> str:
        return INVITATION_AGGREGATE_TYPE


@dataclass
class CreateInvite(_InviteCommand):
    """Creates an invite; the age is optional."""

    command_type: ClassVar[str] = CREATE_INVITE_COMMAND

    name: str = ""
    age: int = 0


@dataclass
class AcceptInvite(_InviteCommand):
    """Accepts an invite."""

    command_type: ClassVar[str] = ACCEPT_INVITE_COMMAND


@dataclass
class DeclineInvite(_InviteCommand):
    """Declines an invite."""

    command_type: ClassVar[str] = DECLINE_INVITE_COMMAND


@dataclass
class ConfirmInvite(_InviteCommand):
    """Confirms an accepted invite."""

    command_type: ClassVar[str] = CONFIRM_INVITE_COMMAND


@dataclass
class DenyInvite(_InviteCommand):
    """Denies an accepted invite."""

    command_type: ClassVar[str] = DENY_INVITE_COMMAND


COMMANDS: dict[str, type[_InviteCommand]] = {
    cls.command_type: cls
    for cls in (CreateInvite, AcceptInvite, DeclineInvite, ConfirmInvite, DenyInvite)
}