"""Response payloads sent back to HTTP clients."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


def _plain(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    return to_dict() if callable(to_dict) else value


@dataclass
class Res:
    """Generic response envelope; ``meta`` and ``data`` are omitted when unset."""

    response_code: str = ""
    response_message: str = ""
    meta: Any = None
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "response_code": self.response_code,
            "response_message": self.response_message,
        }
        if self.meta is not None:
            out["meta"] = _plain(self.meta)
        if self.data is not None:
            out["data"] = _plain(self.data)
        return out


@dataclass
class Token:
    """An issued access token."""

    access_token: str = ""
    expires_at: int = 0
    token_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ResLogin(Res):
    """Login response; the token is always present in ``data``."""

    data: Token = field(default_factory=Token)

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["data"] = self.data.to_dict()
        return out


@dataclass
class ResRegister(Res):
    """Registration response; ``data`` is left out when registration failed."""

    def to_dict(self) -> dict[str, Any]:
        return super().to_dict()


@dataclass
class Pagination:
    """Paging information for list responses."""

    page_number: int = 0
    per_page: int = 0
    total_page: int = 0
    total_record: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class UserDto:
    """Public view of a user."""

    name: str = ""
    user_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)