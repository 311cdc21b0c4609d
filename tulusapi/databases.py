"""Connection strings and connections for the application's databases."""

from __future__ import annotations

import pymysql

from .configuration import Db
from .logger import get_logger

_MYSQL_DEFAULT_PORT = 3306


def mysql_dsn(db: Db) -> str:
    """Return the MySQL data source name for ``db``."""
    return (
        f"{db.user}:{db.password}@tcp({db.host}:{db.port})/{db.name}"
        "?charset=utf8mb4&parseTime=True&loc=Local"
    )


def postgres_dsn(db: Db) -> str:
    """Return the PostgreSQL URL for ``db``.

    Raises ValueError when the configured port is not an integer.
    """
    try:
        port = int(db.port)
    except ValueError:
        get_logger().error(
            "Error while converting postgres port to int",
            extra={"port": db.port},
        )
        raise
    return (
        f"postgres://{db.user}:{db.password}@{db.host}:{port}/{db.name}"
        "?sslmode=disable&search_path=public"
    )


def mongo_uri(host: str, port: str, username: str, password: str, database: str) -> str:
    """Return the MongoDB connection URI used by the application."""
    return (
        "mongodb://" + username + ":" + password + "@" + host + ":" + port + "/"
        + database + "s?authSource=admin&authMechanism=SCRAM-SHA-256"
    )


def connect_mysql(db: Db) -> pymysql.connections.Connection:
    """Open a MySQL connection with the settings in ``db``.

    Raises ValueError for a non-numeric port and the driver's errors when
    the server cannot be reached.
    """
    port = int(db.port) if db.port else _MYSQL_DEFAULT_PORT
    try:
        return pymysql.connect(
            host=db.host,
            port=port,
            user=db.user,
            password=db.password,
            database=db.name,
            charset="utf8mb4",
            autocommit=True,
        )
    except pymysql.MySQLError as err:
        get_logger().error("Cannot connect to the local database", extra={"error": err})
        raise