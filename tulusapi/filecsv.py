"""Reading and appending reference numbers in CSV and plain files."""

from __future__ import annotations

import csv
import os
from collections.abc import Iterable, Sequence
from typing import IO

from .logger import get_logger

RECORD_WIDTH = 10


def open_file(path: str | os.PathLike[str]) -> IO[str]:
    """Open an existing file for reading and writing."""
    try:
        return open(path, "r+", encoding="utf-8", newline="")
    except OSError as err:
        get_logger().error("Error while open file", extra={"error": err})
        raise


class _RecordFile:
    def __init__(self, file: IO[str]) -> None:
        self.file = file

    def close(self) -> None:
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ValidateCsv(_RecordFile):
    """CSV file whose first column holds reference numbers."""

    def append_data(self, data: Sequence[str]) -> None:
        """Append one record."""
        try:
            csv.writer(self.file, lineterminator="\n").writerow(data)
            self.file.flush()
        except (csv.Error, OSError) as err:
            get_logger().error("Error while AppendData to CSV", extra={"error": err})
        print("Appending succeed")

    def append_all_data(self, data: Iterable[Sequence[str]]) -> None:
        """Append several records."""
        try:
            csv.writer(self.file, lineterminator="\n").writerows(data)
            self.file.flush()
        except (csv.Error, OSError) as err:
            get_logger().error("Error while AppendAllData to CSV", extra={"error": err})
        print("Appending all succeed")

    def read_data(self) -> list[str]:
        """Return the first field of every record from the current position.

        Blank lines are skipped; every record must have as many fields as the
        first one, otherwise csv.Error is raised.
        """
        reader = csv.reader(self.file)
        ref_numbers: list[str] = []
        expected: int | None = None
        try:
            for record in reader:
                if not record:
                    continue
                if expected is None:
                    expected = len(record)
                elif len(record) != expected:
                    raise csv.Error(f"record on line {reader.line_num}: wrong number of fields")
                ref_numbers.append(record[0])
        except csv.Error as err:
            get_logger().error("Error while reading CSV file", extra={"error": err})
            raise
        get_logger().info("Ref Numbers from CSV", extra={"refNumbers": ref_numbers})
        return ref_numbers

    def close(self) -> None:
        """Close the underlying file."""
        self.file.close()


class ValidateFile(_RecordFile):
    """Plain file of fixed-width reference numbers."""

    def append_data(self, data: Sequence[str]) -> None:
        """Append the first value of ``data`` as a line."""
        self.file.write(data[0] + "\n")

    def append_all_data(self, data: Iterable[Sequence[str]]) -> None:
        """Append the first value of each row as a line."""
        for row in data:
            self.file.write(row[0] + "\n")

    def read_data(self) -> list[str]:
        """Return the rest of the file in chunks of ``RECORD_WIDTH`` characters."""
        return list(iter(lambda: self.file.read(RECORD_WIDTH), ""))

    def close(self) -> None:
        """Close the underlying file."""
        self.file.close()