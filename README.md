# eventhorizon

Building blocks for applications built on CQRS and event sourcing, using only
the standard library (Python 3.10 or later).

## What is inside

- `eventhorizon.core`: the immutable `Event` (`new_event`, `for_aggregate`),
  `AggregateBase`, which numbers and collects uncommitted events, the function
  adapters `CommandHandlerFunc` and `EventHandlerFunc`, the event matchers,
  middleware chaining and `EntityNotFoundError`.
- `eventhorizon.httputils`: two WSGI applications. `command_app` turns a
  POSTed body into a command and hands it to a command handler. `query_app`
  serves items from a read repository as JSON.
- `eventhorizon.todo`: a todo-list domain with commands (`commands`), events
  (`events`), the `TodoAggregate` (`aggregate`), the `TodoList` read model
  (`model`) and the `TodoProjector` (`projector`).
- `eventhorizon.guestlist`: an invitation domain with commands, events, the
  `InvitationAggregate`, the `Invitation` and `GuestList` read models with their
  projectors, a `ResponseSaga`, and logging helpers (`logging_middleware`,
  `EventLogger`).
- `eventhorizon.coverage`: a tool that merges coverage profile files.

## Events and matchers

```python
import uuid
from datetime import datetime

from eventhorizon.core import MatchAggregates, MatchAll, MatchEvents, for_aggregate, new_event

event = new_event(
    "todolist:created", None, datetime.now(),
    for_aggregate("todolist", uuid.uuid4(), 1),
)
MatchAll(MatchEvents("todolist:created"), MatchAggregates("todolist")).match(event)  # True
```

- `MatchEvents(*event_types)` matches any of the given event types.
- `MatchAggregates(*aggregate_types)` matches any of the given aggregate types.
- `MatchAny(*matchers)` matches when at least one matcher does. An empty
  `MatchAny` matches nothing.
- `MatchAll(*matchers)` matches when every matcher does. An empty `MatchAll`
  matches everything.

`MatchEvents` and `MatchAggregates` never match a missing event (`None`).

## Middleware

`use_command_handler_middleware(handler, m1, m2, m3)` wraps a command handler
so that `m1` runs first, then `m2`, then `m3`, and then the handler itself.
`use_event_handler_middleware` does the same for event handlers. A middleware
is a callable that takes a handler and returns a handler. Plain functions can
be wrapped with `CommandHandlerFunc` or `EventHandlerFunc`.

## Aggregates and projectors

`handle_command` checks a command and records events. It does not change the
aggregate's state. State changes only when the events are passed to
`apply_event`:

```python
import uuid

from eventhorizon.todo.aggregate import TodoAggregate
from eventhorizon.todo.commands import AddItem, Create
from eventhorizon.todo.model import TodoList
from eventhorizon.todo.projector import TodoProjector

list_id = uuid.uuid4()
aggregate = TodoAggregate(list_id)
projector = TodoProjector()
model = TodoList()

for cmd in (Create(id=list_id), AddItem(id=list_id, description="write docs")):
    aggregate.handle_command(cmd)
    for event in aggregate.uncommitted_events():
        aggregate.apply_event(event)
        model = projector.project(event, model)
    aggregate.clear_uncommitted_events()

print(model.to_json())
```

When a command or event is rejected, an exception is raised:

- `TodoError` and its subclass `ItemNotFoundError` come from the todo aggregate.
- `InvitationError` comes from the invitation aggregate.
- `ProjectionError` comes from the projectors.

`TodoProjector.project` returns `None` for a deleted list.

The guest-list `ResponseSaga(guest_limit)` reacts to accepted invites by
sending `ConfirmInvite` to the command handler while there is room, and
`DenyInvite` once the limit is reached. `GuestListProjector(repo, event_id)`
counts responses. It loads and saves a `GuestList` through any object with
`find(entity_id)` and `save(entity)`. `find` must raise `EntityNotFoundError`
when nothing is stored.

## HTTP

```python
from functools import partial
from wsgiref.simple_server import make_server

from eventhorizon.httputils import command_app
from eventhorizon.todo.commands import ADD_ITEM_COMMAND, create_command

app = command_app(aggregate, partial(create_command, ADD_ITEM_COMMAND))
make_server("localhost", 8080, app).serve_forever()
```

### `command_app`

- Accepts only `POST`. Any other method gets `405`.
- Passes the raw body to the factory, then the command to `handle_command`.
- A factory `LookupError` answers `400` with "could not create command".
- A factory `ValueError` answers `400` with "could not decode command".
- An error from the handler answers `400` with "could not handle command".
- Success answers `200` with an empty body.

### `query_app(repo)`

- Accepts only `GET`.
- A path ending in `/` returns `repo.find_all()`.
- Otherwise the last path segment is parsed as a UUID and `repo.find(id)` is
  returned. A bad ID answers `400`. `EntityNotFoundError` answers `404`.
- Results are encoded as JSON. Objects with a `to_dict` method and dataclasses
  are converted first.

## Merging coverage profiles

```
eh-coverage [root] [out]
```

The command collects every `.coverprofile` file under `root` (default: the
current directory) and sums the counts of identical blocks. It writes the
sorted lines to `out` (default: `coverage.out`). With no arguments or more
than two, it prints usage and exits with status 1. From code, call
`eventhorizon.coverage.merge_profiles(root, out)`. It returns the written
lines and raises `CoverageError` on unreadable or malformed profiles.

## What the package does not do

The package has no event store, no read-model repositories and no storage
back end of any kind. It also has no event bus, command bus or outbox. Nothing
loads aggregates from stored events, and nothing routes events to handlers.
You supply the repository objects and wire handlers yourself.

The HTTP apps are plain WSGI callables, not a server. The package provides no
live event stream to browsers and no static file serving.

## Running the tests

```
pip install -e ".[test]"
pytest
```