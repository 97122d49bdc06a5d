"""Shared HTTP transport and normalized adapter errors for internal services."""

from __future__ import annotations

import asyncio
import contextlib
import json
import socket
import threading
from dataclasses import dataclass
from http import HTTPStatus
from http.client import HTTPConnection, HTTPException, HTTPSConnection
from typing import Any, Final, Protocol
from urllib.error import HTTPError
from urllib.parse import urlsplit, urlunsplit
from urllib.request import (
    HTTPHandler,
    HTTPSHandler,
    OpenerDirector,
    Request,
    build_opener,
)

from pydantic import BaseModel

from manage_service.domain.deadline import Deadline

UNREADABLE_BODY_PLACEHOLDER: Final = "[can not read body]"
JSON_HEADERS: Final = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class HttpResponse:
    """Normalized HTTP response data returned by transport implementations.

    `body_bytes` is None when the response body could not be read.
    """

    status_code: int
    reason: str
    body_bytes: bytes | None


class HttpTransportPort(Protocol):
    """Transport protocol used by internal service adapters."""

    async def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
        timeout_seconds: float,
    ) -> HttpResponse:
        """Execute one HTTP request and return normalized response data."""


class ServiceAdapterError(RuntimeError):
    """Base class for normalized internal-service adapter failures."""


class RequestConstructionError(ServiceAdapterError):
    """Raised when a request cannot be built from configuration or input."""


class TransportError(ServiceAdapterError):
    """Raised for connection failures, timeouts and cancellation."""


class UpstreamStatusError(ServiceAdapterError):
    """Raised when an upstream service answers with a non-2xx status."""

    def __init__(self, *, service: str, status_code: int, status: str, body: str) -> None:
        super().__init__(f"{service} returned {status}: {body}")
        self.service = service
        self.status_code = status_code
        self.status = status
        self.body = body


class DecodeError(ServiceAdapterError):
    """Raised when a response body does not match the expected contract."""


class UrllibHttpTransport:
    """urllib-based async transport implementation for internal HTTP calls."""

    async def request(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
        timeout_seconds: float,
    ) -> HttpResponse:
        """Execute HTTP request in a worker thread and normalize HTTP errors."""

        return await asyncio.to_thread(
            self._request_sync,
            method=method,
            url=url,
            headers=headers,
            body=body,
            timeout_seconds=timeout_seconds,
        )

    def _request_sync(
        self,
        *,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes | None,
        timeout_seconds: float,
    ) -> HttpResponse:
        request = Request(url=url, data=body, headers=headers, method=method)
        watchdog = _ConnectionWatchdog(timeout_seconds)
        opener = build_opener(_WatchedHTTPHandler(watchdog), _WatchedHTTPSHandler(watchdog))
        watchdog.start()
        try:
            response = _open_normalized(opener, request, timeout_seconds=timeout_seconds)
        except (OSError, HTTPException) as error:
            if watchdog.expired:
                raise TransportError("request aborted: deadline exceeded") from error
            raise TransportError(f"transport connection failure: {error}") from error
        finally:
            watchdog.cancel()

        if watchdog.expired:
            raise TransportError("request aborted: deadline exceeded")
        return response


def _open_normalized(
    opener: OpenerDirector,
    request: Request,
    *,
    timeout_seconds: float,
) -> HttpResponse:
    try:
        with opener.open(request, timeout=timeout_seconds) as response:
            return HttpResponse(
                status_code=int(response.status),
                reason=str(response.reason or ""),
                body_bytes=_read_body(response),
            )
    except HTTPError as error:
        return HttpResponse(
            status_code=int(error.code),
            reason=str(error.reason or ""),
            body_bytes=_read_body(error),
        )


class _Readable(Protocol):
    def read(self) -> bytes: ...


def _read_body(response: _Readable) -> bytes | None:
    """Return the full body, or None when it is truncated or the socket fails."""

    try:
        return response.read()
    except (OSError, HTTPException):
        return None


class _ConnectionWatchdog:
    """Shut down every socket of one request once its wall-clock budget is spent.

    urllib timeouts apply per socket operation, so a peer trickling bytes
    could otherwise keep the worker thread alive past the deadline.
    """

    def __init__(self, timeout_seconds: float) -> None:
        self._lock = threading.Lock()
        self._connections: list[HTTPConnection] = []
        self._expired = False
        self._timer = threading.Timer(max(timeout_seconds, 0.0), self._expire)
        self._timer.daemon = True

    @property
    def expired(self) -> bool:
        with self._lock:
            return self._expired

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        self._timer.cancel()

    def register(self, connection: HTTPConnection) -> None:
        with self._lock:
            self._connections.append(connection)
            expired = self._expired
        if expired:
            _shutdown_socket(connection)

    def _expire(self) -> None:
        with self._lock:
            self._expired = True
            connections = list(self._connections)
        for connection in connections:
            _shutdown_socket(connection)


def _shutdown_socket(connection: HTTPConnection) -> None:
    sock = connection.sock
    if sock is None:
        return
    # Already closed by the peer or by http.client.
    with contextlib.suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


class _WatchedConnectionMixin:
    def __init__(self, *args: Any, watchdog: _ConnectionWatchdog, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._watchdog = watchdog

    def connect(self) -> None:
        super().connect()  # type: ignore[misc]
        self._watchdog.register(self)  # type: ignore[arg-type]


class _WatchedHTTPConnection(_WatchedConnectionMixin, HTTPConnection):
    pass


class _WatchedHTTPSConnection(_WatchedConnectionMixin, HTTPSConnection):
    pass


class _WatchedHTTPHandler(HTTPHandler):
    def __init__(self, watchdog: _ConnectionWatchdog) -> None:
        super().__init__()
        self._watchdog = watchdog

    def http_open(self, req: Request) -> Any:
        return self.do_open(_WatchedHTTPConnection, req, watchdog=self._watchdog)


class _WatchedHTTPSHandler(HTTPSHandler):
    def __init__(self, watchdog: _ConnectionWatchdog) -> None:
        super().__init__()
        self._watchdog = watchdog

    def https_open(self, req: Request) -> Any:
        return self.do_open(
            _WatchedHTTPSConnection,
            req,
            context=self._context,
            watchdog=self._watchdog,
        )


def build_service_url(base_url: str, path: str) -> str:
    """Replace the path of a configured service base URL with one endpoint path."""

    try:
        parts = urlsplit(base_url)
        # Port parsing is lazy; touch it so malformed ports fail here.
        _ = parts.port
    except ValueError as error:
        raise RequestConstructionError(f"invalid service url {base_url!r}: {error}") from error
    if parts.scheme not in {"http", "https"} or not parts.hostname:
        raise RequestConstructionError(f"invalid service url {base_url!r}")
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def status_line(status_code: int, reason: str) -> str:
    """Render `<code> <reason>`, filling in the standard phrase when absent."""

    phrase = reason.strip()
    if not phrase:
        try:
            phrase = HTTPStatus(status_code).phrase
        except ValueError:
            phrase = ""
    return f"{status_code} {phrase}".rstrip()


def encode_json_body(payload: BaseModel) -> bytes:
    """Serialize one wire model using its aliases."""

    return payload.model_dump_json(by_alias=True).encode("utf-8")


def decode_error_body(payload: bytes | None) -> str:
    if payload is None:
        return UNREADABLE_BODY_PLACEHOLDER
    return payload.decode("utf-8", errors="replace")


def decode_json_object(payload: bytes | None, *, service: str) -> dict[str, object]:
    """Decode a JSON object body or raise `DecodeError`."""

    if payload is None:
        raise DecodeError(f"{service} response body could not be read")
    try:
        decoded = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise DecodeError(f"decoding {service} response: {error}") from error
    if not isinstance(decoded, dict):
        raise DecodeError(f"decoding {service} response: expected JSON object")
    return decoded


async def post_json(
    *,
    transport: HttpTransportPort,
    service: str,
    url: str,
    payload: BaseModel,
    deadline: Deadline,
) -> HttpResponse:
    """Send exactly one JSON POST bounded by deadline and require a 2xx answer."""

    if deadline.expired:
        raise TransportError(f"{service} request not sent: deadline exceeded")
    try:
        body = encode_json_body(payload)
    except ValueError as error:
        raise RequestConstructionError(f"encoding {service} request: {error}") from error

    remaining = deadline.remaining()
    try:
        response = await asyncio.wait_for(
            transport.request(
                method="POST",
                url=url,
                headers=dict(JSON_HEADERS),
                body=body,
                timeout_seconds=remaining,
            ),
            timeout=remaining,
        )
    except TransportError:
        raise
    except TimeoutError as error:
        raise TransportError(f"sending request to {service}: deadline exceeded") from error
    except Exception as error:  # noqa: BLE001
        raise TransportError(f"sending request to {service}: {error}") from error

    if response.status_code < 200 or response.status_code >= 300:
        raise UpstreamStatusError(
            service=service,
            status_code=response.status_code,
            status=status_line(response.status_code, response.reason),
            body=decode_error_body(response.body_bytes),
        )
    return response
