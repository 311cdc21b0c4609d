"""A small JSON-over-HTTP client for calling upstream services."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import asdict, is_dataclass
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict

from .logger import get_logger

DEFAULT_TIMEOUT = 20.0
_POOL_SIZE = 100


def _json_default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def _encode_json(data: Any) -> bytes:
    return json.dumps(data, default=_json_default).encode("utf-8")


def _query_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _encode_query(params: Any) -> str:
    if is_dataclass(params) and not isinstance(params, type):
        params = asdict(params)
    if not isinstance(params, Mapping):
        raise TypeError("query parameters must be a mapping or a dataclass")
    pairs: list[tuple[str, str]] = []
    for key in sorted(params, key=str):
        value = params[key]
        if isinstance(value, (list, tuple)):
            pairs.extend((str(key), _query_value(item)) for item in value)
        else:
            pairs.append((str(key), _query_value(value)))
    return urlencode(pairs)


class HostClient:
    """Sends one request to ``host + endpoint`` and returns the raw reply.

    Every request carries ``Content-Type: application/json``. When
    ``query_param`` is given it replaces the query string of the URL.
    """

    def __init__(
        self,
        host: str,
        endpoint: str = "",
        method: str = "",
        data: Any = None,
        header: Mapping[str, str] | None = None,
        query_param: Any = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.host = host
        self.endpoint = endpoint
        self.method = method
        self.data = data
        self.header = dict(header or {})
        self.query_param = query_param
        self.timeout = timeout

    @property
    def url(self) -> str:
        return self.host + self.endpoint

    def post(self) -> tuple[bytes, int]:
        """POST ``data`` as JSON, or with no body when ``data`` is None."""
        body = None if self.data is None else _encode_json(self.data)
        return self.send("POST", body)

    def get(self) -> tuple[bytes, int]:
        """GET the endpoint."""
        return self.send("GET", None)

    def patch(self) -> tuple[bytes, int]:
        """Replace the resource with ``data`` as JSON (sent with PUT)."""
        return self.send("PUT", _encode_json(self.data))

    def send(self, method: str, body: bytes | None) -> tuple[bytes, int]:
        """Send the request and return the body and status code.

        Raises requests.RequestException when no response is received.
        """
        headers: CaseInsensitiveDict[str] = CaseInsensitiveDict(self.header)
        headers["Content-Type"] = "application/json"

        url = self.url
        if self.query_param is not None:
            parts = urlsplit(url)
            url = urlunsplit(parts._replace(query=_encode_query(self.query_param)))

        get_logger().info(
            "Client request",
            extra={"host": self.url, "headers": dict(headers), "request": body, "method": self.method},
        )

        adapter = HTTPAdapter(pool_connections=_POOL_SIZE, pool_maxsize=_POOL_SIZE)
        with requests.Session() as session:
            session.mount("http://", adapter)
            session.mount("https://", adapter)
            try:
                response = session.request(method, url, data=body, headers=headers, timeout=self.timeout)
            except requests.RequestException as err:
                print("Error reading response. ", err)
                raise
            content = response.content

        get_logger().info(
            "Client response",
            extra={
                "status": f"{response.status_code} {response.reason or ''}".strip(),
                "headers": dict(response.headers),
                "body": content.decode("utf-8", errors="replace"),
            },
        )
        return content, response.status_code