"""Relations and the college_summary view.

colleges is the root; tuition_info, diversity_stats and salary_potential are
1:1 extensions keyed by college_id. Deleting a college removes its extension
rows; the surrogate id cannot change while extension rows point at it.
"""
from __future__ import annotations

import logging
from sqlite3 import Connection

from .db import get_conn

logger = logging.getLogger(__name__)

# children first, so DELETE/DROP in this order never trips a foreign key
TABLES = ("tuition_info", "diversity_stats", "salary_potential", "colleges")
VIEWS = ("college_summary",)

DDL = """
CREATE TABLE IF NOT EXISTS colleges (
  college_id INTEGER PRIMARY KEY AUTOINCREMENT,
  name VARCHAR(100) NOT NULL,
  state VARCHAR(50) NOT NULL,
  UNIQUE (name, state)
);

CREATE TABLE IF NOT EXISTS tuition_info (
  college_id INTEGER PRIMARY KEY
    REFERENCES colleges(college_id) ON DELETE CASCADE ON UPDATE RESTRICT,
  institution_type VARCHAR(100) NOT NULL,
  degree_length VARCHAR(50) NOT NULL,
  in_state_tuition INTEGER NOT NULL CHECK (in_state_tuition >= 0),
  in_state_total INTEGER NOT NULL CHECK (in_state_total >= 0),
  out_of_state_tuition INTEGER NOT NULL CHECK (out_of_state_tuition >= 0),
  out_of_state_total INTEGER NOT NULL CHECK (out_of_state_total >= 0)
);

CREATE TABLE IF NOT EXISTS diversity_stats (
  college_id INTEGER PRIMARY KEY
    REFERENCES colleges(college_id) ON DELETE CASCADE ON UPDATE RESTRICT,
  total_enrollment INTEGER NOT NULL CHECK (total_enrollment >= 0),
  women INTEGER NOT NULL CHECK (women >= 0),
  american_indian_alaska_native INTEGER NOT NULL CHECK (american_indian_alaska_native >= 0),
  asian INTEGER NOT NULL CHECK (asian >= 0),
  black INTEGER NOT NULL CHECK (black >= 0),
  hispanic INTEGER NOT NULL CHECK (hispanic >= 0),
  hawaiian_native_pacific_islander INTEGER NOT NULL CHECK (hawaiian_native_pacific_islander >= 0),
  white INTEGER NOT NULL CHECK (white >= 0),
  two_or_more INTEGER NOT NULL CHECK (two_or_more >= 0),
  unknown_race INTEGER NOT NULL CHECK (unknown_race >= 0),
  non_resident_foreign INTEGER NOT NULL CHECK (non_resident_foreign >= 0),
  total_minority INTEGER NOT NULL CHECK (total_minority >= 0)
);

CREATE TABLE IF NOT EXISTS salary_potential (
  college_id INTEGER PRIMARY KEY
    REFERENCES colleges(college_id) ON DELETE CASCADE ON UPDATE RESTRICT,
  early_career_pay INTEGER NOT NULL CHECK (early_career_pay >= 0),
  mid_career_pay INTEGER NOT NULL CHECK (mid_career_pay >= 0),
  stem_percent INTEGER NOT NULL CHECK (stem_percent BETWEEN 0 AND 100)
);

CREATE INDEX IF NOT EXISTS idx_colleges_state ON colleges(state);
CREATE INDEX IF NOT EXISTS idx_tuition_type ON tuition_info(institution_type);

CREATE VIEW IF NOT EXISTS college_summary AS
SELECT
  c.name,
  c.state,
  t.institution_type,
  t.degree_length,
  t.in_state_tuition,
  t.out_of_state_tuition,
  s.early_career_pay,
  s.mid_career_pay,
  s.stem_percent
FROM colleges c
JOIN tuition_info t ON c.college_id = t.college_id
JOIN salary_potential s ON c.college_id = s.college_id;
"""


def ensure_schema(conn: Connection | None = None) -> None:
    """Create tables, indexes and the view if they are missing."""
    if conn is None:
        with get_conn() as c:
            c.executescript(DDL)
    else:
        conn.executescript(DDL)
    logger.debug("college schema ensured")


def drop_schema(conn: Connection) -> None:
    for v in VIEWS:
        conn.execute(f"DROP VIEW IF EXISTS {v}")
    for t in TABLES:
        conn.execute(f"DROP TABLE IF EXISTS {t}")
    logger.info("college schema dropped")
