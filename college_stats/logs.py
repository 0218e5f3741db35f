"""Audit trail for operations that change college data.

Every create/update/delete on a college or one of its tuition, diversity or
salary rows is recorded as one operation_log row, keyed by the college it
touched, so the history of a single college can be read back with
`search_logs(entity_type="COLLEGE", entity_id=...)`.
"""
from __future__ import annotations

import datetime as dt
import json
import logging
import time
import uuid
from typing import Any, Optional

from .db import get_conn

logger = logging.getLogger(__name__)

DDL = """
CREATE TABLE IF NOT EXISTS operation_log (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  ts TEXT NOT NULL,
  action TEXT NOT NULL,
  entity_type TEXT,
  entity_id TEXT,
  request_id TEXT NOT NULL,
  payload_json TEXT,
  before_json TEXT,
  after_json TEXT,
  result TEXT NOT NULL,
  err_msg TEXT,
  latency_ms INTEGER
);
CREATE INDEX IF NOT EXISTS idx_log_ts ON operation_log(ts);
CREATE INDEX IF NOT EXISTS idx_log_action ON operation_log(action);
CREATE INDEX IF NOT EXISTS idx_log_entity ON operation_log(entity_type, entity_id);
"""

_JSON_FIELDS = (("payload_json", "payload"), ("before_json", "before"), ("after_json", "after"))


def ensure_log_schema(db_path: str | None = None) -> None:
    with get_conn(db_path) as conn:
        conn.executescript(DDL)


def _dump(obj: Any) -> Optional[str]:
    return json.dumps(obj, ensure_ascii=False, default=str) if obj is not None else None


class LogContext:
    """Collects one operation's payload and before/after snapshots; write() persists it."""

    def __init__(self, action: str):
        self.action = action
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.entity_type: Optional[str] = None
        self.entity_id: Optional[str] = None
        self.payload: Any = None
        self.before: Any = None
        self.after: Any = None

    def set_entity(self, etype: str, eid: int | str) -> None:
        self.entity_type = etype
        self.entity_id = str(eid)

    def set_payload(self, obj: Any) -> None:
        self.payload = obj

    def set_before(self, obj: Any) -> None:
        self.before = obj

    def set_after(self, obj: Any) -> None:
        self.after = obj

    def write(self, result: str = "OK", err: Optional[str] = None) -> None:
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        with get_conn() as conn:
            conn.execute(
                "INSERT INTO operation_log(ts, action, entity_type, entity_id, request_id, "
                "payload_json, before_json, after_json, result, err_msg, latency_ms) "
                "VALUES(?,?,?,?,?,?,?,?,?,?,?)",
                (
                    dt.datetime.now(dt.timezone.utc).isoformat(),
                    self.action,
                    self.entity_type,
                    self.entity_id,
                    self.request_id,
                    _dump(self.payload),
                    _dump(self.before),
                    _dump(self.after),
                    result,
                    err,
                    elapsed_ms,
                ),
            )
        if err:
            logger.warning("%s %s/%s failed: %s", self.action, self.entity_type, self.entity_id, err)
        else:
            logger.info("%s %s/%s %s (%d ms)", self.action, self.entity_type, self.entity_id, result, elapsed_ms)


def _decode(row) -> dict:
    item = dict(row)
    for col, key in _JSON_FIELDS:
        raw = item.pop(col)
        item[key] = json.loads(raw) if raw is not None else None
    return item


def search_logs(
    *,
    action: Optional[str] = None,
    entity_type: Optional[str] = None,
    entity_id: Optional[int | str] = None,
    q: Optional[str] = None,
    ts_from: Optional[str] = None,
    ts_to: Optional[str] = None,
    page: int = 1,
    size: int = 20,
) -> tuple[int, list[dict]]:
    """Page through operation_log, newest first. Returns (total, items) with JSON columns decoded."""
    where = []
    params: dict = {}
    if action:
        where.append("action = :action")
        params["action"] = action
    if entity_type:
        where.append("entity_type = :entity_type")
        params["entity_type"] = entity_type
    if entity_id is not None:
        where.append("entity_id = :entity_id")
        params["entity_id"] = str(entity_id)
    if q:
        where.append("(payload_json LIKE :q OR before_json LIKE :q OR after_json LIKE :q)")
        params["q"] = f"%{q}%"
    if ts_from:
        where.append("ts >= :ts_from")
        params["ts_from"] = ts_from
    if ts_to:
        where.append("ts <= :ts_to")
        params["ts_to"] = ts_to
    wh = " WHERE " + " AND ".join(where) if where else ""
    with get_conn() as conn:
        total = conn.execute(f"SELECT COUNT(1) AS cnt FROM operation_log{wh}", params).fetchone()["cnt"]
        rows = conn.execute(
            f"SELECT id, ts, action, entity_type, entity_id, request_id, payload_json, before_json, "
            f"after_json, result, err_msg, latency_ms FROM operation_log{wh} "
            "ORDER BY ts DESC, id DESC LIMIT :limit OFFSET :offset",
            {**params, "limit": size, "offset": (max(page, 1) - 1) * size},
        ).fetchall()
    return int(total), [_decode(r) for r in rows]
