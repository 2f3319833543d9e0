"""Shared HTTP utilities (requests.Session + auth headers + per-call deadline + JSON parsing)."""

from __future__ import annotations

import socket
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from .config import ClientConfig
from .errors import raise_for_status, raise_for_transport


JsonType = Union[Dict[str, Any], List[Any], None]

DEADLINE_THREAD_NAME = "reviews-client-deadline"


@dataclass(frozen=True)
class RequestOptions:
    """Everything a single call may set on top of the defaults.

    `headers` are merged over the default headers (caller wins on conflict).
    `body` is an already-serialized JSON string.
    """

    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[str] = None


@dataclass(frozen=True)
class HttpClient:
    """A thin wrapper around requests.Session bound to one API configuration."""

    session: requests.Session
    config: ClientConfig


def build_session(*, user_agent: str) -> requests.Session:
    """Create a requests session. No retry adapter is mounted: each call is sent once."""

    session = requests.Session()
    session.headers.update({"User-Agent": user_agent})
    return session


def default_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def _response_socket(resp: requests.Response) -> Optional[socket.socket]:
    raw = resp.raw
    sock = getattr(getattr(raw, "connection", None), "sock", None)
    if sock is None:
        # http.client drops conn.sock on "Connection: close"; the response file still holds it.
        fp = getattr(getattr(raw, "_fp", None), "fp", None)
        sock = getattr(getattr(fp, "raw", None), "_sock", None)
    return sock if isinstance(sock, socket.socket) else None


class _Deadline:
    """Budget for one whole call.

    `requests` applies its timeout to each socket operation, so a server that keeps
    sending a byte at a time never trips it. When the budget runs out this timer shuts
    the response socket down, which wakes any blocked read. The timer thread is
    cancelled and joined when the `with` block exits.
    """

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        self._expired = threading.Event()
        self._lock = threading.Lock()
        self._resp: Optional[requests.Response] = None
        self._timer = threading.Timer(seconds, self._expire)
        self._timer.name = DEADLINE_THREAD_NAME
        self._timer.daemon = True

    @property
    def expired(self) -> bool:
        return self._expired.is_set()

    def __enter__(self) -> "_Deadline":
        self._timer.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._timer.cancel()
        self._timer.join()

    def attach(self, resp: requests.Response) -> None:
        with self._lock:
            self._resp = resp
        if self.expired:
            self._abort(resp)

    def _expire(self) -> None:
        self._expired.set()
        with self._lock:
            resp = self._resp
        if resp is not None:
            self._abort(resp)

    @staticmethod
    def _abort(resp: requests.Response) -> None:
        sock = _response_socket(resp)
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # Already closed by the peer or by the reader.
            pass


def _parse_json(resp: requests.Response) -> JsonType:
    # An unparseable body is "no data"; only the status decides success.
    try:
        return resp.json()
    except ValueError:
        return None


def request_json(http: HttpClient, endpoint: str, options: Optional[RequestOptions] = None) -> JsonType:
    """Send one request to `base_url + endpoint` and return the parsed JSON body.

    The configured timeout bounds the whole call, body download included.
    Raises ReviewsError for non-2xx statuses and for transport failures.
    """

    options = options or RequestOptions()
    url = f"{http.config.base_url}{endpoint}"
    headers = {**default_headers(http.config.api_key), **dict(options.headers)}
    timeout = http.config.timeout_seconds

    with _Deadline(timeout) as deadline:
        try:
            resp = http.session.request(
                options.method.upper(),
                url,
                headers=headers,
                data=options.body,
                timeout=timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            raise_for_transport(exc, deadline_passed=deadline.expired)

        # Closing the response releases the connection on every path below.
        with resp:
            deadline.attach(resp)
            try:
                # Download the body now, while the deadline can still abort it.
                resp.content
            except requests.RequestException as exc:
                raise_for_transport(exc, deadline_passed=deadline.expired)
            if deadline.expired:
                raise_for_transport(
                    requests.Timeout(f"No complete response from {url} within {timeout:g}s"),
                    deadline_passed=True,
                )

            data = _parse_json(resp)
            if not 200 <= resp.status_code < 300:
                raise_for_status(resp.status_code, data, resp.reason or "")
            return data
