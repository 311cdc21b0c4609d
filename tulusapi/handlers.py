"""HTTP handlers for login and registration."""

from __future__ import annotations

import json
from typing import Any

from flask import Response, jsonify, request

from .logger import get_logger
from .models import ReqLogin, ReqRegister, ValidationError
from .user_usecase import UserUsecase, hash_password


def _json_body() -> Any:
    raw = request.get_data(cache=True)
    if not raw:
        raise ValidationError("EOF")
    try:
        return json.loads(raw)
    except ValueError as err:
        raise ValidationError(str(err)) from err


def _bad_request(err: Exception) -> tuple[Response, int]:
    get_logger().error("An error occurred", extra={"error": str(err)})
    return jsonify(f"An error occurred: {err}"), 400


class UserHandler:
    """Flask views for ``/login`` and ``/register``."""

    def __init__(self, user_usecase: UserUsecase) -> None:
        self._usecase = user_usecase

    def login(self) -> tuple[Response, int]:
        """Bind a login request and answer with the usecase's result."""
        try:
            req = ReqLogin.from_dict(_json_body())
        except ValidationError as err:
            return _bad_request(err)
        return jsonify(self._usecase.login(req).to_dict()), 200

    def register(self) -> tuple[Response, int]:
        """Bind a registration request, hash its password and register it."""
        try:
            req = ReqRegister.from_dict(_json_body())
        except ValidationError as err:
            return _bad_request(err)
        hashed = ReqRegister(name=req.name, user_name=req.user_name, password=hash_password(req.password))
        return jsonify(self._usecase.register(hashed).to_dict()), 200