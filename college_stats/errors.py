from __future__ import annotations

import sqlite3
from typing import NoReturn


class CollegeStatsError(Exception):
    pass


class UniquenessError(CollegeStatsError):
    """A college with the same (name, state) exists, or a college already has this profile row."""


class ReferentialIntegrityError(CollegeStatsError):
    """A tuition/diversity/salary row points at a college that does not exist."""


class CollegeNotFoundError(CollegeStatsError):
    pass


class UnknownReportError(CollegeStatsError):
    pass


def raise_integrity_error(exc: sqlite3.IntegrityError) -> NoReturn:
    """Re-raise a SQLite constraint failure as UniquenessError or ReferentialIntegrityError.

    CHECK and NOT NULL failures propagate unchanged.
    """
    msg = str(exc)
    if msg.startswith("UNIQUE constraint failed") or msg.startswith("PRIMARY KEY"):
        raise UniquenessError(msg) from exc
    if msg.startswith("FOREIGN KEY constraint failed"):
        raise ReferentialIntegrityError(msg) from exc
    raise exc
