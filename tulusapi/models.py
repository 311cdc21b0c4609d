"""Domain models, request bodies and the user store interface."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from .constants import ERROR_NOT_FOUND


class ValidationError(ValueError):
    """A request body or claim set could not be bound."""


class RecordNotFound(LookupError):
    """The requested record does not exist."""

    def __init__(self, message: str = ERROR_NOT_FOUND) -> None:
        super().__init__(message)


def _bind(struct: str, data: Any, spec: dict[str, str]) -> dict[str, str]:
    if not isinstance(data, Mapping):
        raise ValidationError("request body must be a JSON object")
    values: dict[str, str] = {}
    for key in spec:
        value = data.get(key)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ValidationError(f"field {key!r} must be a string")
        values[key] = value
    problems = [
        f"Key: '{struct}.{name}' Error:Field validation for '{name}' failed on the 'required' tag"
        for key, name in spec.items()
        if not values[key]
    ]
    if problems:
        raise ValidationError("\n".join(problems))
    return values


@dataclass(frozen=True)
class ReqLogin:
    """Body of a login request."""

    user_name: str
    password: str

    @classmethod
    def from_dict(cls, data: Any) -> ReqLogin:
        return cls(**_bind("ReqLogin", data, {"user_name": "UserName", "password": "Password"}))


@dataclass(frozen=True)
class ReqRegister:
    """Body of a registration request."""

    name: str
    user_name: str
    password: str

    @classmethod
    def from_dict(cls, data: Any) -> ReqRegister:
        spec = {"name": "Name", "user_name": "UserName", "password": "Password"}
        return cls(**_bind("ReqRegister", data, spec))


@dataclass
class Project:
    """A project record."""

    id: int = 0
    name: str = ""
    description: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class User:
    """A stored user account."""

    id: int = 0
    name: str = ""
    user_name: str = ""
    password: str = ""
    email: str = ""
    created_at: datetime | None = None
    created_by: int = 0
    updated_at: datetime | None = None
    updated_by: int = 0


def _claim_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"claim {key!r} must be a string")
    return value


def _claim_int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"claim {key!r} must be a number")
    return int(value)


@dataclass(frozen=True)
class UserClaims:
    """Claims carried by an access token."""

    user_name: str = ""
    audience: str = ""
    expires_at: int = 0
    id: str = ""
    issued_at: int = 0
    issuer: str = ""
    not_before: int = 0
    subject: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> UserClaims:
        if not isinstance(data, Mapping):
            raise ValidationError("claims must be a JSON object")
        return cls(
            user_name=_claim_str(data, "user_name"),
            audience=_claim_str(data, "aud"),
            expires_at=_claim_int(data, "exp"),
            id=_claim_str(data, "jti"),
            issued_at=_claim_int(data, "iat"),
            issuer=_claim_str(data, "iss"),
            not_before=_claim_int(data, "nbf"),
            subject=_claim_str(data, "sub"),
        )


@dataclass(frozen=True)
class Video:
    """A video reference."""

    id: str = ""


class UserStore(Protocol):
    """Storage of user accounts."""

    def get_by_id(self, user_id: int) -> User:
        """Return the user with this id or raise RecordNotFound."""

    def get_by_user_name(self, user_name: str) -> User:
        """Return the user with this user name or raise RecordNotFound."""

    def create_user(self, user: User) -> None:
        """Store a new user."""