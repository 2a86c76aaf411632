"""WSGI applications that accept commands and serve read models as JSON."""

from __future__ import annotations

import dataclasses
import json
import posixpath
import uuid
from datetime import datetime
from http import HTTPStatus
from typing import Any, Callable, Iterable, Protocol

from eventhorizon.core import CommandHandler, EntityNotFoundError

StartResponse = Callable[..., Any]
WSGIApp = Callable[[dict, StartResponse], Iterable[bytes]]

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class ReadRepo(Protocol):
    """A repository that finds one entity by ID, or all of them."""

    def find(self, entity_id: uuid.UUID) -> Any: ...

    def find_all(self) -> Any: ...


def _status_line(status: HTTPStatus) -> str:
    return f"{status.value} {status.phrase}"


def _error(start_response: StartResponse, status: HTTPStatus, message: str) -> list[bytes]:
    body = (message + "\n").encode()
    start_response(
        _status_line(status),
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


def _read_body(environ: dict) -> bytes:
    length = (environ.get("CONTENT_LENGTH") or "").strip()
    if not length:
        return b""
    size = int(length)
    if size < 0:
        raise ValueError(f"invalid content length: {size}")
    return environ["wsgi.input"].read(size)


def command_app(
    command_handler: CommandHandler, command_factory: Callable[[bytes], Any]
) -> WSGIApp:
    """Return an app that decodes a POSTed JSON body into a command and handles it.

    The factory turns the raw body into a command; it raises LookupError when
    the command cannot be created and ValueError when the body cannot be decoded.
    """

    def app(environ: dict, start_response: StartResponse) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        if method != "POST":
            return _error(
                start_response, HTTPStatus.METHOD_NOT_ALLOWED, f"unsupported method: {method}"
            )

        try:
            body = _read_body(environ)
        except (OSError, ValueError) as exc:
            return _error(start_response, HTTPStatus.BAD_REQUEST, f"could not read command: {exc}")

        try:
            cmd = command_factory(body)
        except LookupError as exc:
            return _error(
                start_response, HTTPStatus.BAD_REQUEST, f"could not create command: {exc}"
            )
        except ValueError as exc:
            return _error(
                start_response, HTTPStatus.BAD_REQUEST, f"could not decode command: {exc}"
            )

        try:
            command_handler.handle_command(cmd)
        except Exception as exc:
            return _error(
                start_response, HTTPStatus.BAD_REQUEST, f"could not handle command: {exc}"
            )

        start_response(_status_line(HTTPStatus.OK), [("Content-Length", "0")])
        return [b""]

    return app


def _jsonable(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _encode(data: Any) -> bytes:
    text = json.dumps(
        _jsonable(data), ensure_ascii=False, separators=(",", ":"), allow_nan=False
    )
    for char, escape in _HTML_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode()


def query_app(repo: ReadRepo) -> WSGIApp:
    """Return an app that serves items of a read repository as JSON.

    A path ending in a slash returns all items; otherwise the last path
    segment is parsed as the ID of the one item to return.
    """

    def app(environ: dict, start_response: StartResponse) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        if method != "GET":
            return _error(
                start_response, HTTPStatus.METHOD_NOT_ALLOWED, f"unsupported method: {method}"
            )

        path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
        id_text = posixpath.basename(path)

        if not id_text:
            try:
                data = repo.find_all()
            except Exception as exc:
                return _error(
                    start_response,
                    HTTPStatus.INTERNAL_SERVER_ERROR,
                    f"could not find items: {exc}",
                )
        else:
            try:
                entity_id = uuid.UUID(id_text)
            except ValueError as exc:
                return _error(start_response, HTTPStatus.BAD_REQUEST, f"could not parse ID: {exc}")
            try:
                data = repo.find(entity_id)
            except EntityNotFoundError:
                return _error(start_response, HTTPStatus.NOT_FOUND, "could not find item")
            except Exception as exc:
                return _error(
                    start_response,
                    HTTPStatus.INTERNAL_SERVER_ERROR,
                    f"could not find item: {exc}",
                )

        try:
            body = _encode(data)
        except (TypeError, ValueError) as exc:
            return _error(
                start_response,
                HTTPStatus.INTERNAL_SERVER_ERROR,
                f"could not encode result: {exc}",
            )

        start_response(
            _status_line(HTTPStatus.OK),
            [("Content-Type", "application/json"), ("Content-Length", str(len(body)))],
        )
        return [body]

    return app