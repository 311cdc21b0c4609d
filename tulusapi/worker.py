"""Concurrent insertion of projects through a pool of workers."""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from .logger import get_logger
from .models import Project

DEFAULT_POOL_SIZE = 100
PROCESS_DELAY = 0.1

_DB_LOCK = threading.Lock()


def process(project: Project, connection: Any) -> int | None:
    """Insert one project and return its row id.

    Raises ValueError for a project without a name and the driver's error
    when the insert fails.
    """
    print(f"Start processing {project.name}")
    time.sleep(PROCESS_DELAY)

    if not project.name:
        raise ValueError(f"error on job {project.name}")

    with _DB_LOCK:
        cursor = connection.cursor()
        try:
            cursor.execute(
                "INSERT INTO project (name, description) VALUES(?, ?)",
                (project.name, project.description),
            )
            connection.commit()
            row_id = cursor.lastrowid
        except Exception as err:
            get_logger().error("An error occurred", extra={"error": err})
            raise
        finally:
            cursor.close()

    print(f"Finish processing {project.name} With {row_id}")
    return row_id


def pooled_work(
    projects: Iterable[Project],
    connection: Any,
    pool_size: int = DEFAULT_POOL_SIZE,
) -> list[Exception]:
    """Process all projects on ``pool_size`` workers; return the errors met."""
    if pool_size < 1:
        raise ValueError("pool_size must be at least 1")
    start = time.monotonic()
    errors: list[Exception] = []
    with ThreadPoolExecutor(max_workers=pool_size) as pool:
        futures = [pool.submit(process, project, connection) for project in projects]
        for future in as_completed(futures):
            err = future.exception()
            if err is not None:
                print("finished with error:", err)
                errors.append(err)  # type: ignore[arg-type]
    print(f"Took ===============> {time.monotonic() - start:.3f}s")
    return errors