"""Shared constants."""

from enum import Enum

ERROR_NOT_FOUND = "record not found"


class DataSource(str, Enum):
    """Where input data is read from."""

    GOOGLESHEET = "googlesheet"
    CSV = "csv"