"""Small helpers: clock access and token signing."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import jwt

from .logger import get_logger


def current_time() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(timezone.utc)


def generate_token(payload: Mapping[str, Any], secret_key: str) -> str:
    """Sign ``payload`` as an HS256 JSON Web Token."""
    try:
        return jwt.encode(dict(payload), secret_key, algorithm="HS256")
    except (TypeError, ValueError, jwt.PyJWTError) as err:
        get_logger().error("Error while generate token", extra={"error": err})
        raise