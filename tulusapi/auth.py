"""Bearer-token authentication for protected routes."""

from __future__ import annotations

import time
from typing import Any

import jwt

from .dto import Res
from .logger import get_logger
from .models import UserClaims, UserStore, ValidationError

UNAUTHORIZED = "Unauthorized"
MALFORMED = "That's not even a token"
BAD_TIMING = "Timing is everything"
CANNOT_HANDLE = "Couldn't handle this token:"

_HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")
_KEYED_ALGORITHMS = ("RS256", "RS384", "RS512", "ES256", "ES384", "ES512", "PS256", "PS384", "PS512")
_UNVERIFIED_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iat": False,
    "verify_aud": False,
    "verify_iss": False,
}


class AuthError(Exception):
    """The request carries no usable credentials."""

    status_code = 401

    def __init__(self, message: str = UNAUTHORIZED) -> None:
        super().__init__(message)
        self.message = message

    @property
    def response(self) -> Res:
        """The response body sent back to the client."""
        return Res(response_code="401", response_message=self.message)


def _decode_unverified(token: str) -> tuple[dict[str, Any], UserClaims]:
    try:
        header = jwt.get_unverified_header(token)
        payload = jwt.decode(token, options={"verify_signature": False})
        return header, UserClaims.from_dict(payload)
    except (jwt.DecodeError, ValidationError) as err:
        raise AuthError(MALFORMED) from err


def _signature_problem(token: str, alg: Any, secret_key: str) -> str | None:
    if alg == "none":
        return "'none' signature type is not allowed"
    if alg in _KEYED_ALGORITHMS:
        return "key is of invalid type"
    try:
        jwt.decode(token, secret_key, algorithms=[alg], options=_UNVERIFIED_OPTIONS)
    except jwt.InvalidSignatureError:
        return "signature is invalid"
    except jwt.PyJWTError as err:
        return str(err)
    return None


def _parse(token: str, secret_key: str) -> UserClaims:
    header, claims = _decode_unverified(token)
    alg = header.get("alg")
    if alg not in _HMAC_ALGORITHMS and alg != "none" and alg not in _KEYED_ALGORITHMS:
        raise AuthError(f"{CANNOT_HANDLE}signing method ({alg}) is unavailable.")

    now = int(time.time())
    timing = False
    message: str | None = None
    if claims.expires_at and now > claims.expires_at:
        timing = True
        message = f"token is expired by {now - claims.expires_at}s"
    if claims.issued_at and now < claims.issued_at:
        message = "Token used before issued"
    if claims.not_before and now < claims.not_before:
        timing = True
        message = "token is not valid yet"

    signature = _signature_problem(token, alg, secret_key)
    if signature is not None:
        message = signature

    if message is None:
        return claims
    if timing:
        raise AuthError(BAD_TIMING)
    raise AuthError(f"{CANNOT_HANDLE}{message}")


def authenticate(authorization: str, secret_key: str, user_store: UserStore) -> UserClaims:
    """Check an ``Authorization: Bearer <jwt>`` value and return its claims.

    The token must be signed with ``secret_key`` and name a user known to
    ``user_store``. Raises AuthError carrying the message to report.
    """
    if not authorization:
        raise AuthError()
    parts = authorization.split("Bearer ")
    if len(parts) != 2:
        raise AuthError()

    claims = _parse(parts[1], secret_key)
    try:
        user_store.get_by_user_name(claims.user_name)
    except Exception as err:
        get_logger().error("User not found", extra={"error": str(err)})
        raise AuthError() from err
    return claims