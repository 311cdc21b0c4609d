"""Application start-up: wire the configuration into a running server."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

import pymysql
from flask import Flask

from .configuration import Config, load_config
from .databases import connect_mysql
from .logger import get_logger
from .router import create_app
from .user_repository import UserRepository
from .user_usecase import UserUsecase


def build_app(config: Config) -> Flask:
    """Connect the database and build the application for ``config``."""
    connection = connect_mysql(config.database.mysql)
    get_logger().info("Database connected.")
    user_store = UserRepository(connection)
    user_usecase = UserUsecase(user_store, config.app.secret_key)
    return create_app(user_usecase, user_store, config.app.secret_key)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the configuration and serve the API until interrupted."""
    parser = argparse.ArgumentParser(prog="tulusapi", description="Serve the user API over HTTP.")
    parser.parse_args(argv)

    config = load_config()
    try:
        app = build_app(config)
    except (pymysql.MySQLError, ValueError) as err:
        print(f"RECOVERED: {err}")
        return 1

    port = config.app.port
    get_logger().info("Starting application", extra={"port": port})
    try:
        app.run(host="0.0.0.0", port=port)
    except KeyboardInterrupt:
        print("Exit")
        return 1
    except OSError as err:
        print(f"server returning an error {err}")
        return 2
    return 0