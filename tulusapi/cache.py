"""Redis cache connection."""

from __future__ import annotations

import redis

_DEFAULT_HOST = "localhost"
_DEFAULT_PORT = 6379


def _split_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        host, port = addr, ""
    try:
        port_number = int(port) if port else _DEFAULT_PORT
    except ValueError as err:
        raise ValueError(f"invalid port in address {addr!r}") from err
    return host or _DEFAULT_HOST, port_number


def new_cache(addr: str, username: str, password: str) -> redis.Redis:
    """Connect to Redis at ``host:port`` on database 0 and check it answers.

    Raises ValueError for a malformed address and redis.RedisError when the
    server does not answer the ping.
    """
    host, port = _split_addr(addr)
    client = redis.Redis(
        host=host,
        port=port,
        username=username or None,
        password=password or None,
        db=0,
    )
    try:
        client.ping()
    except redis.RedisError:
        client.close()
        raise
    print("Redis connected")
    return client