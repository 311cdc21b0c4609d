"""Login and registration logic."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from datetime import datetime, timedelta

import jwt

from .dto import ResLogin, ResRegister, UserDto
from .logger import get_logger
from .models import ReqLogin, ReqRegister, User, UserStore
from .utils import current_time, generate_token

TOKEN_LIFETIME = timedelta(minutes=5)


def hash_password(password: str) -> str:
    """Return the hex MD5 digest under which passwords are stored."""
    return hashlib.md5(password.encode()).hexdigest()


class UserUsecase:
    """Authenticates users and registers new accounts."""

    def __init__(
        self,
        user_store: UserStore,
        secret_key: str,
        clock: Callable[[], datetime] = current_time,
    ) -> None:
        self._store = user_store
        self._secret_key = secret_key
        self._clock = clock

    def login(self, req: ReqLogin) -> ResLogin:
        """Check the credentials and issue a short-lived access token."""
        try:
            user = self._store.get_by_user_name(req.user_name)
        except Exception as err:
            get_logger().error("Error while Getting username", extra={"error": err})
            return ResLogin(response_code="401", response_message="Unautorized.")

        hashed = hash_password(req.password)
        if hashed != user.password:
            get_logger().error("Password not matching", extra={"request_password": hashed})
            return ResLogin(response_code="401", response_message="Unauthorized.")

        expires_at = int((self._clock() + TOKEN_LIFETIME).timestamp())
        claims = {"user_name": user.user_name, "exp": expires_at, "is": str(user.id)}
        try:
            access_token = generate_token(claims, self._secret_key)
        except (TypeError, ValueError, jwt.PyJWTError) as err:
            get_logger().info("Error while Signed string", extra={"error": err})
            return ResLogin(response_code="401", response_message="Unautorized")

        res = ResLogin(response_code="200", response_message="Success")
        res.data.access_token = access_token
        res.data.expires_at = expires_at
        return res

    def register(self, req: ReqRegister) -> ResRegister:
        """Store a new user; the password is kept exactly as given."""
        user = User(name=req.name, user_name=req.user_name, password=req.password)
        try:
            self._store.create_user(user)
        except Exception as err:
            get_logger().error("Error while creating user", extra={"error": err})
            return ResRegister(response_code="500", response_message="Internal server error")
        return ResRegister(
            response_code="200",
            response_message="Success",
            data=UserDto(name=req.name, user_name=req.user_name),
        )