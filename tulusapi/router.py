"""The Flask application: routes, CORS policy and authentication."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from flask import Blueprint, Flask, Response, g, jsonify, request

from .auth import AuthError, authenticate
from .handlers import UserHandler
from .models import UserStore
from .user_usecase import UserUsecase

ALLOWED_ORIGIN = "https://tulus.tech"
_ALLOW_METHODS = ("PUT", "PATCH")
_ALLOW_HEADERS = ("Origin",)
_EXPOSE_HEADERS = ("Content-Length",)
_MAX_AGE = timedelta(hours=12)


def _cors_check() -> Response | None:
    origin = request.headers.get("Origin")
    if not origin:
        return None
    if origin in (f"http://{request.host}", f"https://{request.host}"):
        return None
    if origin != ALLOWED_ORIGIN:
        return Response(status=403)
    if request.method == "OPTIONS":
        response = Response(status=204)
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Methods"] = ",".join(_ALLOW_METHODS)
        response.headers["Access-Control-Allow-Headers"] = ",".join(_ALLOW_HEADERS)
        response.headers["Access-Control-Max-Age"] = str(int(_MAX_AGE.total_seconds()))
        response.headers["Vary"] = "Origin"
        return response
    g.cors_origin = origin
    return None


def _cors_headers(response: Response) -> Response:
    origin = g.get("cors_origin")
    if origin:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Expose-Headers"] = ",".join(_EXPOSE_HEADERS)
        response.headers["Vary"] = "Origin"
    return response


def _echo() -> tuple[Response, int]:
    # The request body is a stream, which serialises as an empty object.
    return jsonify({}), 200


def create_app(user_usecase: UserUsecase, user_store: UserStore, secret_key: str) -> Flask:
    """Build the application; routes under ``/api`` require a bearer token."""
    app = Flask("tulusapi")
    app.before_request(_cors_check)
    app.after_request(_cors_headers)

    handler = UserHandler(user_usecase)
    app.add_url_rule("/login", "login", handler.login, methods=["POST"])
    app.add_url_rule("/register", "register", handler.register, methods=["POST"])

    api = Blueprint("api", __name__, url_prefix="/api")

    @api.before_request
    def _require_auth() -> Any:
        try:
            claims = authenticate(request.headers.get("Authorization", ""), secret_key, user_store)
        except AuthError as err:
            return jsonify(err.response.to_dict()), err.status_code
        g.user_id = claims.issuer
        return None

    api.add_url_rule("/", "echo", _echo, methods=["POST"])
    app.register_blueprint(api)
    return app