"""Client for the typing-practice service."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .host_client import HostClient

RANDOM_TYPING_ENDPOINT = "/api/typings/random"


@dataclass
class ReqHeader:
    """Browser-like headers forwarded to the service."""

    accept: str = ""
    accept_language: str = ""
    connection: str = ""
    content_type: str = ""
    cookie: str = ""
    origin: str = ""
    referer: str = ""
    sec_fetch_dest: str = ""
    sec_fetch_mode: str = ""
    sect_fetch_site: str = ""
    user_agent: str = ""
    x_requested_with: str = ""
    sec_ch_ua: str = ""
    sec_ch_ua_mobile: str = ""
    sec_ch_ua_platform: str = ""


class TulusHostError(ValueError):
    """The service's reply could not be understood."""


@dataclass(frozen=True)
class ResTypingRandom:
    """A random typing exercise."""

    id: str = ""
    author: str = ""
    content: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ResTypingRandom:
        """Decode the reply; keys ``Id``, ``Author``, ``Content`` match in any case."""
        if not isinstance(data, Mapping):
            raise TulusHostError("response must be a JSON object")
        by_key = {str(key).lower(): value for key, value in data.items()}
        values: dict[str, str] = {}
        for name in ("id", "author", "content"):
            value = by_key.get(name)
            if value is None:
                value = ""
            if not isinstance(value, str):
                raise TulusHostError(f"field {name!r} must be a string")
            values[name] = value
        return cls(**values)


class TulusHost:
    """Calls the typing-practice service at ``host``."""

    def __init__(self, host: str) -> None:
        self.host = host

    def get_random_typing(self, req_header: ReqHeader) -> ResTypingRandom:
        """Fetch a random exercise.

        Raises requests.RequestException when the service cannot be reached
        and TulusHostError when its reply cannot be decoded.
        """
        headers = {
            "Accept": req_header.accept,
            "Content-Type": req_header.content_type,
            "Cookie": req_header.cookie,
        }
        client = HostClient(self.host, RANDOM_TYPING_ENDPOINT, "POST", None, headers, None)
        body, _status = client.post()
        try:
            decoded = json.loads(body)
        except ValueError as err:
            raise TulusHostError(f"invalid response body: {err}") from err
        return ResTypingRandom.from_dict(decoded)