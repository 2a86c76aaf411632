"""Events, event matchers, aggregate bookkeeping and handler middleware."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from functools import reduce
from typing import Any, Callable, Iterator, Protocol, runtime_checkable

NIL_UUID = uuid.UUID(int=0)


@dataclass(frozen=True)
class Event:
    """An immutable domain event, optionally bound to an aggregate."""

    event_type: str
    data: Any
    timestamp: datetime
    aggregate_type: str = ""
    aggregate_id: uuid.UUID = NIL_UUID
    version: int = 0
    metadata: dict = field(default_factory=dict)

    def __str__(self) -> str:
        if self.aggregate_id != NIL_UUID and self.version:
            return f"{self.event_type}({self.aggregate_id}, v{self.version})"
        return self.event_type


EventOption = Callable[[Event], Event]


def for_aggregate(aggregate_type: str, aggregate_id: uuid.UUID, version: int) -> EventOption:
    """Return an event option that binds an event to an aggregate and version."""

    def _apply(event: Event) -> Event:
        return replace(
            event,
            aggregate_type=aggregate_type,
            aggregate_id=aggregate_id,
            version=version,
        )

    return _apply


def new_event(event_type: str, data: Any, timestamp: datetime, *args: EventOption) -> Event:
    """Create an event and apply the given options to it in order."""
    return reduce(lambda event, option: option(event), args, Event(event_type, data, timestamp))


@runtime_checkable
class Command(Protocol):
    """A command addressed to an aggregate."""

    @property
    def aggregate_id(self) -> uuid.UUID: ...

    @property
    def aggregate_type(self) -> str: ...

    @property
    def command_type(self) -> str: ...


@runtime_checkable
class CommandHandler(Protocol):
    """Anything that handles commands, raising on failure."""

    def handle_command(self, cmd: Any) -> None: ...


@runtime_checkable
class EventHandler(Protocol):
    """Anything that handles events, raising on failure."""

    def handle_event(self, event: Event) -> None: ...


@runtime_checkable
class EventMatcher(Protocol):
    """Decides whether an event is of interest."""

    def match(self, event: Event | None) -> bool: ...


class EntityNotFoundError(LookupError):
    """Raised when a repository holds no entity for an ID."""

    def __init__(self, message: str = "could not find entity") -> None:
        super().__init__(message)


@dataclass
class AggregateBase:
    """Keeps the identity, version and uncommitted events of an aggregate."""

    aggregate_type: str
    entity_id: uuid.UUID
    version: int = 0
    _events: list[Event] = field(default_factory=list, init=False, repr=False)

    def append_event(self, event_type: str, data: Any, timestamp: datetime) -> Event:
        """Record a new uncommitted event with the next version number."""
        event = new_event(
            event_type,
            data,
            timestamp,
            for_aggregate(
                self.aggregate_type,
                self.entity_id,
                self.version + len(self._events) + 1,
            ),
        )
        self._events.append(event)
        return event

    def uncommitted_events(self) -> list[Event]:
        """Return the events appended since the last clear."""
        return list(self._events)

    def clear_uncommitted_events(self) -> None:
        """Forget all uncommitted events."""
        self._events.clear()


@dataclass(frozen=True)
class CommandHandlerFunc:
    """Adapts a plain callable to the command handler interface."""

    func: Callable[[Any], Any]

    def handle_command(self, cmd: Any) -> None:
        self.func(cmd)


@dataclass(frozen=True)
class EventHandlerFunc:
    """Adapts a plain callable to the event handler interface."""

    func: Callable[[Event], Any]

    @property
    def handler_type(self) -> str:
        return f"handler-func-{id(self.func):x}"

    def handle_event(self, event: Event) -> None:
        self.func(event)


class MatchEvents:
    """Matches any of the event types; a missing event never matches."""

    __slots__ = ("event_types",)

    def __init__(self, *event_types: str) -> None:
        self.event_types = tuple(event_types)

    def __iter__(self) -> Iterator[str]:
        return iter(self.event_types)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, MatchEvents) and other.event_types == self.event_types

    def __repr__(self) -> str:
        return f"MatchEvents{self.event_types!r}"

    def match(self, event: Event | None) -> bool:
        return event is not None and event.event_type in self.event_types


class MatchAggregates:
    """Matches any of the aggregate types; a missing event never matches."""

    __slots__ = ("aggregate_types",)

    def __init__(self, *aggregate_types: str) -> None:
        self.aggregate_types = tuple(aggregate_types)

    def __iter__(self) -> Iterator[str]:
        return iter(self.aggregate_types)

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, MatchAggregates)
            and other.aggregate_types == self.aggregate_types
        )

    def __repr__(self) -> str:
        return f"MatchAggregates{self.aggregate_types!r}"

    def match(self, event: Event | None) -> bool:
        return event is not None and event.aggregate_type in self.aggregate_types


class MatchAny:
    """Matches when any of the matchers match; empty matches nothing."""

    __slots__ = ("matchers",)

    def __init__(self, *matchers: EventMatcher) -> None:
        self.matchers = tuple(matchers)

    def __iter__(self) -> Iterator[EventMatcher]:
        return iter(self.matchers)

    def __repr__(self) -> str:
        return f"MatchAny{self.matchers!r}"

    def match(self, event: Event | None) -> bool:
        return any(m.match(event) for m in self.matchers)


class MatchAll:
    """Matches when all of the matchers match; empty matches everything."""

    __slots__ = ("matchers",)

    def __init__(self, *matchers: EventMatcher) -> None:
        self.matchers = tuple(matchers)

    def __iter__(self) -> Iterator[EventMatcher]:
        return iter(self.matchers)

    def __repr__(self) -> str:
        return f"MatchAll{self.matchers!r}"

    def match(self, event: Event | None) -> bool:
        return all(m.match(event) for m in self.matchers)


CommandHandlerMiddleware = Callable[[CommandHandler], CommandHandler]
EventHandlerMiddleware = Callable[[EventHandler], EventHandler]


def use_command_handler_middleware(
    handler: CommandHandler, *args: CommandHandlerMiddleware
) -> CommandHandler:
    """Wrap a command handler so the first middleware given runs first."""
    return reduce(lambda h, m: m(h), reversed(args), handler)


def use_event_handler_middleware(
    handler: EventHandler, *args: EventHandlerMiddleware
) -> EventHandler:
    """Wrap an event handler so the first middleware given runs first."""
    return reduce(lambda h, m: m(h), reversed(args), handler)