"""Logging of commands and events in the guest list domain."""

from __future__ import annotations

import logging
from typing import Any

from eventhorizon.core import CommandHandler, CommandHandlerFunc, Event

log = logging.getLogger(__name__)


def logging_middleware(handler: CommandHandler) -> CommandHandler:
    """Wrap a command handler so every command is logged before it is handled."""

    def _handle(cmd: Any) -> None:
        log.info("command: %r", cmd)
        handler.handle_command(cmd)

    return CommandHandlerFunc(_handle)


class EventLogger:
    """An event handler that logs every event."""

    @property
    def handler_type(self) -> str:
        return "logger"

    def handle_event(self, event: Event) -> None:
        log.info("event: %s", event)