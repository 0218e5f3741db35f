import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


def tuition(**kw):
    row = {
        "institution_type": "Public",
        "degree_length": "4 Years",
        "in_state_tuition": 10000,
        "in_state_total": 20000,
        "out_of_state_tuition": 30000,
        "out_of_state_total": 40000,
    }
    row.update(kw)
    return row


def diversity(**kw):
    row = {
        "total_enrollment": 10000,
        "women": 5500,
        "american_indian_alaska_native": 50,
        "asian": 900,
        "black": 800,
        "hispanic": 1200,
        "hawaiian_native_pacific_islander": 20,
        "white": 6000,
        "two_or_more": 300,
        "unknown_race": 130,
        "non_resident_foreign": 600,
        "total_minority": 3270,
    }
    row.update(kw)
    return row


def salary(**kw):
    row = {"early_career_pay": 50000, "mid_career_pay": 90000, "stem_percent": 20}
    row.update(kw)
    return row


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "college_statistics_test.db"
    # Point the package at this temp DB
    os.environ["COLLEGE_DB_PATH"] = str(path)
    from college_stats.schema import ensure_schema
    from college_stats.logs import ensure_log_schema
    ensure_schema()
    ensure_log_schema()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    from college_stats.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("COLLEGE_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    from college_stats.schema import TABLES
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in TABLES + ("operation_log",):
            conn.execute(f"DELETE FROM {t}")
        conn.execute("DELETE FROM sqlite_sequence")
        conn.commit()
    finally:
        conn.close()
    yield


@pytest.fixture()
def add_college(tmp_db_path):
    """Insert a college plus any profile rows; returns the new college_id."""
    from college_stats.db import get_conn
    from college_stats.repository import college_repo, profile_repo

    def _add(name, state="CA", tuition=None, diversity=None, salary=None):
        with get_conn() as conn:
            cid = college_repo.insert_college(conn, name, state)
            if tuition is not None:
                profile_repo.insert_tuition(conn, cid, tuition)
            if diversity is not None:
                profile_repo.insert_diversity(conn, cid, diversity)
            if salary is not None:
                profile_repo.insert_salary(conn, cid, salary)
        return cid

    return _add
