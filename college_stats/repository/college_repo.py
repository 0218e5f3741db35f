from __future__ import annotations

import sqlite3
from sqlite3 import Connection
from typing import Optional

from ..errors import CollegeNotFoundError, raise_integrity_error


def insert_college(conn: Connection, name: str, state: str) -> int:
    try:
        cur = conn.execute(
            "INSERT INTO colleges(name, state) VALUES(?,?)",
            (name, state),
        )
    except sqlite3.IntegrityError as e:
        raise_integrity_error(e)
    return int(cur.lastrowid)


def get_college(conn: Connection, college_id: int):
    return conn.execute(
        "SELECT college_id, name, state FROM colleges WHERE college_id=?",
        (college_id,),
    ).fetchone()


def find_college(conn: Connection, name: str, state: str):
    return conn.execute(
        "SELECT college_id, name, state FROM colleges WHERE name=? AND state=?",
        (name, state),
    ).fetchone()


def list_colleges(conn: Connection, q: Optional[str] = None, state: Optional[str] = None):
    sql = "SELECT college_id, name, state FROM colleges"
    where = []
    params: dict = {}
    if q:
        where.append("name LIKE :q")
        params["q"] = f"%{q}%"
    if state:
        where.append("state = :state")
        params["state"] = state
    if where:
        sql += " WHERE " + " AND ".join(where)
    sql += " ORDER BY state, name"
    return conn.execute(sql, params).fetchall()


def count_colleges(conn: Connection) -> int:
    return int(conn.execute("SELECT COUNT(1) AS c FROM colleges").fetchone()["c"])


def update_college(conn: Connection, college_id: int, name: Optional[str] = None, state: Optional[str] = None) -> None:
    fields = []
    params: list[object] = []
    if name is not None:
        fields.append("name=?")
        params.append(name)
    if state is not None:
        fields.append("state=?")
        params.append(state)
    if not fields:
        raise ValueError("at least one of name/state must be provided")
    params.append(college_id)
    try:
        cur = conn.execute(f"UPDATE colleges SET {', '.join(fields)} WHERE college_id=?", params)
    except sqlite3.IntegrityError as e:
        raise_integrity_error(e)
    if cur.rowcount == 0:
        raise CollegeNotFoundError(f"college {college_id} not found")


def delete_college(conn: Connection, college_id: int) -> None:
    # extension rows go with it (ON DELETE CASCADE)
    cur = conn.execute("DELETE FROM colleges WHERE college_id=?", (college_id,))
    if cur.rowcount == 0:
        raise CollegeNotFoundError(f"college {college_id} not found")
