# college_stats/services/college_svc.py
from __future__ import annotations

from typing import Mapping, Optional

from ..db import get_conn, transaction
from ..errors import CollegeNotFoundError
from ..logs import LogContext
from ..repository import college_repo, profile_repo

_PROFILE_OPS = {
    "tuition": (profile_repo.get_tuition, profile_repo.insert_tuition, profile_repo.update_tuition),
    "diversity": (profile_repo.get_diversity, profile_repo.insert_diversity, profile_repo.update_diversity),
    "salary": (profile_repo.get_salary, profile_repo.insert_salary, profile_repo.update_salary),
}


def _row(r) -> dict | None:
    return dict(r) if r is not None else None


def create_college(
    name: str,
    state: str,
    log: LogContext,
    tuition: Optional[Mapping[str, object]] = None,
    diversity: Optional[Mapping[str, object]] = None,
    salary: Optional[Mapping[str, object]] = None,
) -> int:
    """Create a college and any profile rows given, all or nothing."""
    with get_conn() as conn:
        with transaction(conn):
            new_id = college_repo.insert_college(conn, name, state)
            if tuition is not None:
                profile_repo.insert_tuition(conn, new_id, tuition)
            if diversity is not None:
                profile_repo.insert_diversity(conn, new_id, diversity)
            if salary is not None:
                profile_repo.insert_salary(conn, new_id, salary)
    log.set_entity("COLLEGE", str(new_id))
    log.set_after({"college_id": new_id, "name": name, "state": state,
                   "tuition": dict(tuition) if tuition else None,
                   "diversity": dict(diversity) if diversity else None,
                   "salary": dict(salary) if salary else None})
    return new_id


def list_colleges(q: Optional[str] = None, state: Optional[str] = None) -> list[dict]:
    with get_conn() as conn:
        return [dict(r) for r in college_repo.list_colleges(conn, q, state)]


def get_college_profile(college_id: int) -> dict:
    with get_conn() as conn:
        row = college_repo.get_college(conn, college_id)
        if row is None:
            raise CollegeNotFoundError(f"college {college_id} not found")
        out = dict(row)
        out["tuition"] = _row(profile_repo.get_tuition(conn, college_id))
        out["diversity"] = _row(profile_repo.get_diversity(conn, college_id))
        out["salary"] = _row(profile_repo.get_salary(conn, college_id))
    return out


def update_college(college_id: int, *, name: str | None = None, state: str | None = None, log: LogContext) -> dict:
    with get_conn() as conn:
        before = college_repo.get_college(conn, college_id)
        if before is None:
            raise CollegeNotFoundError(f"college {college_id} not found")
        college_repo.update_college(conn, college_id, name, state)
        after = dict(college_repo.get_college(conn, college_id))
    log.set_entity("COLLEGE", str(college_id))
    log.set_before(dict(before))
    log.set_after(after)
    return after


def delete_college(college_id: int, log: LogContext) -> None:
    """Delete a college; its tuition, diversity and salary rows are removed with it."""
    before = get_college_profile(college_id)
    with get_conn() as conn:
        college_repo.delete_college(conn, college_id)
    log.set_entity("COLLEGE", str(college_id))
    log.set_before(before)


def _set_profile(kind: str, college_id: int, values: Mapping[str, object], log: LogContext) -> dict:
    getter, inserter, updater = _PROFILE_OPS[kind]
    with get_conn() as conn:
        before = getter(conn, college_id)
        if before is None:
            inserter(conn, college_id, values)
        else:
            updater(conn, college_id, values)
        after = dict(getter(conn, college_id))
    log.set_entity("COLLEGE", college_id)
    log.set_before(_row(before))
    log.set_after(after)
    return after


def set_tuition(college_id: int, values: Mapping[str, object], log: LogContext) -> dict:
    return _set_profile("tuition", college_id, values, log)


def set_diversity(college_id: int, values: Mapping[str, object], log: LogContext) -> dict:
    return _set_profile("diversity", college_id, values, log)


def set_salary(college_id: int, values: Mapping[str, object], log: LogContext) -> dict:
    return _set_profile("salary", college_id, values, log)
