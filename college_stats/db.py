from __future__ import annotations

# college_stats/db.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator
import os

from .config import DEFAULTS, read_config_yaml

# DB path resolution order:
# 1) env COLLEGE_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) college_statistics.db at the project root


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def get_db_path(cfg_path: str | None = None) -> str:
    env_path = os.environ.get("COLLEGE_DB_PATH")
    cfg = read_config_yaml(cfg_path)
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")

    if env_path:
        path = env_path
    elif is_test_env() and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = DEFAULTS["db_path"]

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection. An explicit db_path wins over get_db_path().
    Foreign keys are switched on and rows come back as sqlite3.Row.
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(
        path,
        detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
        check_same_thread=False,
        isolation_level=None,
    )
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Group several statements on an autocommit connection into one unit."""
    conn.execute("BEGIN")
    try:
        yield conn
    except BaseException:
        conn.execute("ROLLBACK")
        raise
    else:
        conn.execute("COMMIT")
