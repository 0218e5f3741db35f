"""Access to the 1:1 extension tables of a college.

Every extension table is keyed by college_id; values are passed as dicts whose
keys are the table's data columns.
"""
from __future__ import annotations

import sqlite3
from sqlite3 import Connection
from typing import Mapping

from ..errors import CollegeNotFoundError, raise_integrity_error

TUITION_COLUMNS = (
    "institution_type",
    "degree_length",
    "in_state_tuition",
    "in_state_total",
    "out_of_state_tuition",
    "out_of_state_total",
)

DIVERSITY_COLUMNS = (
    "total_enrollment",
    "women",
    "american_indian_alaska_native",
    "asian",
    "black",
    "hispanic",
    "hawaiian_native_pacific_islander",
    "white",
    "two_or_more",
    "unknown_race",
    "non_resident_foreign",
    "total_minority",
)

SALARY_COLUMNS = ("early_career_pay", "mid_career_pay", "stem_percent")

PROFILE_TABLES = {
    "tuition_info": TUITION_COLUMNS,
    "diversity_stats": DIVERSITY_COLUMNS,
    "salary_potential": SALARY_COLUMNS,
}


def _values(table: str, values: Mapping[str, object]) -> list[object]:
    cols = PROFILE_TABLES[table]
    missing = [c for c in cols if c not in values]
    if missing:
        raise ValueError(f"{table}: missing columns {', '.join(missing)}")
    return [values[c] for c in cols]


def _insert(conn: Connection, table: str, college_id: int, values: Mapping[str, object]) -> None:
    cols = PROFILE_TABLES[table]
    sql = "INSERT INTO {}(college_id, {}) VALUES({})".format(
        table, ", ".join(cols), ",".join(["?"] * (len(cols) + 1))
    )
    try:
        conn.execute(sql, [college_id, *_values(table, values)])
    except sqlite3.IntegrityError as e:
        raise_integrity_error(e)


def _get(conn: Connection, table: str, college_id: int):
    cols = PROFILE_TABLES[table]
    return conn.execute(
        f"SELECT college_id, {', '.join(cols)} FROM {table} WHERE college_id=?",
        (college_id,),
    ).fetchone()


def _update(conn: Connection, table: str, college_id: int, values: Mapping[str, object]) -> None:
    cols = [c for c in PROFILE_TABLES[table] if c in values]
    if not cols:
        raise ValueError(f"{table}: nothing to update")
    sql = f"UPDATE {table} SET {', '.join(c + '=?' for c in cols)} WHERE college_id=?"
    try:
        cur = conn.execute(sql, [values[c] for c in cols] + [college_id])
    except sqlite3.IntegrityError as e:
        raise_integrity_error(e)
    if cur.rowcount == 0:
        raise CollegeNotFoundError(f"{table} row for college {college_id} not found")


def _delete(conn: Connection, table: str, college_id: int) -> None:
    cur = conn.execute(f"DELETE FROM {table} WHERE college_id=?", (college_id,))
    if cur.rowcount == 0:
        raise CollegeNotFoundError(f"{table} row for college {college_id} not found")


# ---------------- tuition_info ----------------

def insert_tuition(conn: Connection, college_id: int, values: Mapping[str, object]) -> None:
    _insert(conn, "tuition_info", college_id, values)


def get_tuition(conn: Connection, college_id: int):
    return _get(conn, "tuition_info", college_id)


def update_tuition(conn: Connection, college_id: int, values: Mapping[str, object]) -> None:
    _update(conn, "tuition_info", college_id, values)


def delete_tuition(conn: Connection, college_id: int) -> None:
    _delete(conn, "tuition_info", college_id)


# ---------------- diversity_stats ----------------

def insert_diversity(conn: Connection, college_id: int, values: Mapping[str, object]) -> None:
    _insert(conn, "diversity_stats", college_id, values)


def get_diversity(conn: Connection, college_id: int):
    return _get(conn, "diversity_stats", college_id)


def update_diversity(conn: Connection, college_id: int, values: Mapping[str, object]) -> None:
    _update(conn, "diversity_stats", college_id, values)


def delete_diversity(conn: Connection, college_id: int) -> None:
    _delete(conn, "diversity_stats", college_id)


# ---------------- salary_potential ----------------

def insert_salary(conn: Connection, college_id: int, values: Mapping[str, object]) -> None:
    _insert(conn, "salary_potential", college_id, values)


def get_salary(conn: Connection, college_id: int):
    return _get(conn, "salary_potential", college_id)


def update_salary(conn: Connection, college_id: int, values: Mapping[str, object]) -> None:
    _update(conn, "salary_potential", college_id, values)


def delete_salary(conn: Connection, college_id: int) -> None:
    _delete(conn, "salary_potential", college_id)
