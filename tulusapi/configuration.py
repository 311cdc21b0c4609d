"""Application configuration loaded from a JSON file and the environment."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any

from .logger import get_logger

DEFAULT_SEARCH_PATHS = (".", "../", "../../")


@dataclass
class Db:
    name: str = ""
    host: str = ""
    port: str = ""
    user: str = ""
    password: str = ""


@dataclass
class Database:
    psql: Db = field(default_factory=Db)
    mysql: Db = field(default_factory=Db)
    mongo: Db = field(default_factory=Db)


@dataclass
class App:
    port: int = 0
    secret_key: str = ""


@dataclass
class GoogleSheet:
    type: int = 0
    spreadsheet_id: str = ""
    spreadsheet_column_read_range: str = ""
    spreadsheet_name: str = ""
    spreadsheet_description: str = ""


@dataclass
class Header:
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


@dataclass
class TulusTech:
    header: Header = field(default_factory=Header)
    host: str = ""


@dataclass
class Data:
    source: str = ""


@dataclass
class Pubsub:
    project_id: str = ""


@dataclass
class ServiceBus:
    namespace: str = ""


@dataclass
class RedisClient:
    host: str = ""
    port: str = ""
    password: str = ""
    database_name: int = 0
    username: str = ""


@dataclass
class LoggerSettings:
    format: str = ""


@dataclass
class Config:
    """Whole application configuration."""

    database: Database = field(default_factory=Database)
    tulus_tech: TulusTech = field(default_factory=TulusTech)
    app: App = field(default_factory=App)
    google_sheet: GoogleSheet = field(default_factory=GoogleSheet)
    data: Data = field(default_factory=Data)
    pubsub: Pubsub = field(default_factory=Pubsub)
    service_bus: ServiceBus = field(default_factory=ServiceBus)
    redis_client: RedisClient = field(default_factory=RedisClient)
    logger: LoggerSettings = field(default_factory=LoggerSettings)

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Decode a settings map; keys match field names case-insensitively.

        Scalars are converted loosely (numbers to strings and back).
        Raises ValueError when a value cannot be converted.
        """
        return _decode(cls, data, "")


def _decode(cls: type, data: Any, path: str) -> Any:
    if not isinstance(data, Mapping):
        raise ValueError(f"'{path or 'config'}' expected a map, got '{type(data).__name__}'")
    by_key = {str(key).lower(): value for key, value in data.items()}
    target = cls()
    for item in fields(cls):
        key = item.name.replace("_", "")
        if key not in by_key:
            continue
        current = getattr(target, item.name)
        setattr(target, item.name, _convert(current, by_key[key], f"{path}.{key}" if path else key))
    return target


def _convert(current: Any, value: Any, path: str) -> Any:
    if value is None:
        return current
    if is_dataclass(current):
        return _decode(type(current), value, path)
    if isinstance(current, int):
        if isinstance(value, (bool, int)):
            return int(value)
        if isinstance(value, float):
            return int(value)
        if isinstance(value, str):
            if not value:
                return 0
            try:
                return int(value, 0)
            except ValueError as err:
                raise ValueError(f"cannot parse '{path}' as int: {err}") from err
        raise ValueError(f"'{path}' expected an int, got '{type(value).__name__}'")
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    raise ValueError(f"'{path}' expected a string, got '{type(value).__name__}'")


def config_name(env: str) -> str:
    """Return the configuration file name for an environment."""
    return f"config-{env}" if env else "config"


def _find_config(name: str, search_paths: Sequence[str | os.PathLike[str]]) -> Path | None:
    for directory in search_paths:
        candidate = Path(directory) / f"{name}.json"
        if candidate.is_file():
            return candidate
    return None


def _overlay_env(raw: Mapping[str, Any], environ: Mapping[str, str], prefix: str = "") -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in raw.items():
        path = f"{prefix}{key}".lower()
        if isinstance(value, Mapping):
            result[key] = _overlay_env(value, environ, path + ".")
        else:
            result[key] = environ.get(path.upper(), value)
    return result


def load_config(
    search_paths: Sequence[str | os.PathLike[str]] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load the configuration as the process does at start-up.

    The file ``config[-ENV].json`` is looked up in each search path in turn;
    settings found in it may be overridden by environment variables named
    after their dotted key in upper case. Finally the PostgreSQL settings
    fall back to the ``DB_*`` environment variables.
    """
    environ = os.environ if environ is None else environ
    paths = DEFAULT_SEARCH_PATHS if search_paths is None else search_paths
    name = config_name(environ.get("ENV", ""))

    raw: dict[str, Any] = {}
    found = _find_config(name, paths)
    if found is None:
        print("Config file not found")
    else:
        try:
            loaded = json.loads(found.read_text(encoding="utf-8"))
            if not isinstance(loaded, dict):
                raise ValueError("configuration root must be a JSON object")
            raw = loaded
        except (OSError, ValueError) as err:
            print("An error occurred. ", err)

    raw = _overlay_env(raw, environ)
    get_logger().info("Config set up successfully", extra={"config": name})

    try:
        config = Config.from_dict(raw)
    except ValueError as err:
        get_logger().error("Unable to decode into struct", extra={"error": str(err)})
        config = Config()
    return apply_database_env(config, environ)


def apply_database_env(config: Config, environ: Mapping[str, str] | None = None) -> Config:
    """Fill empty PostgreSQL settings from ``DB_*`` variables; returns ``config``."""
    environ = os.environ if environ is None else environ
    psql = config.database.psql
    get_logger().info("Database configuration", extra={"Database": {"name": psql.name, "host": psql.host}})
    if not psql.name:
        psql.name = environ.get("DB_NAME", "")
    if not psql.host:
        psql.host = environ.get("DB_HOST", "")
    if not psql.password:
        psql.password = environ.get("DB_PASSWORD", "")
    if not psql.port:
        psql.port = environ.get("DB_PORT", "")
    return config