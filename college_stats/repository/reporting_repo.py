from __future__ import annotations

from sqlite3 import Connection
from typing import Optional

TOP_N = 10
TOP_STATES = 5
LARGE_ENROLLMENT = 20000
TWO_YEAR = "2 Years"
WOMEN_SHARE_PCT = 50


# ---------------- joins over the base tables ----------------

def colleges_with_tuition(conn: Connection):
    """Columns: name, state, in_state_tuition, out_of_state_tuition"""
    return conn.execute(
        """
        SELECT c.name, c.state, t.in_state_tuition, t.out_of_state_tuition
        FROM colleges c
        JOIN tuition_info t ON c.college_id = t.college_id
        ORDER BY c.name, c.state
        """
    ).fetchall()


def colleges_with_diversity(conn: Connection):
    """Columns: name, total_enrollment, total_minority"""
    return conn.execute(
        """
        SELECT c.name, d.total_enrollment, d.total_minority
        FROM colleges c
        JOIN diversity_stats d ON c.college_id = d.college_id
        ORDER BY c.name, c.state
        """
    ).fetchall()


def colleges_with_salary(conn: Connection):
    """Columns: name, early_career_pay, mid_career_pay"""
    return conn.execute(
        """
        SELECT c.name, s.early_career_pay, s.mid_career_pay
        FROM colleges c
        JOIN salary_potential s ON c.college_id = s.college_id
        ORDER BY c.name, c.state
        """
    ).fetchall()


def top_mid_career_pay(conn: Connection):
    return conn.execute(
        """
        SELECT c.name, s.mid_career_pay
        FROM colleges c
        JOIN salary_potential s ON c.college_id = s.college_id
        ORDER BY s.mid_career_pay DESC, c.name
        LIMIT ?
        """,
        (TOP_N,),
    ).fetchall()


# ---------------- college_summary view ----------------

def college_summary(conn: Connection):
    """Every row of the college_summary view (colleges with both tuition and salary data)."""
    return conn.execute(
        """
        SELECT name, state, institution_type, degree_length,
               in_state_tuition, out_of_state_tuition,
               early_career_pay, mid_career_pay, stem_percent
        FROM college_summary
        ORDER BY name, state
        """
    ).fetchall()


def lowest_in_state_tuition(conn: Connection):
    return conn.execute(
        """
        SELECT name, state, in_state_tuition
        FROM college_summary
        ORDER BY in_state_tuition ASC, name
        LIMIT ?
        """,
        (TOP_N,),
    ).fetchall()


def highest_early_career_pay(conn: Connection):
    return conn.execute(
        """
        SELECT name, early_career_pay
        FROM college_summary
        ORDER BY early_career_pay DESC, name
        LIMIT ?
        """,
        (TOP_N,),
    ).fetchall()


def highest_stem_percent(conn: Connection):
    return conn.execute(
        """
        SELECT name, stem_percent
        FROM college_summary
        ORDER BY stem_percent DESC, name
        LIMIT ?
        """,
        (TOP_N,),
    ).fetchall()


def two_year_high_mid_pay(conn: Connection):
    return conn.execute(
        """
        SELECT name, mid_career_pay
        FROM college_summary
        WHERE degree_length = ?
        ORDER BY mid_career_pay DESC, name
        LIMIT ?
        """,
        (TWO_YEAR, TOP_N),
    ).fetchall()


# ---------------- grouped aggregates ----------------

def avg_tuition_by_state(conn: Connection):
    return conn.execute(
        """
        SELECT c.state,
               AVG(t.in_state_tuition) AS avg_in_state,
               AVG(t.out_of_state_tuition) AS avg_out_state
        FROM colleges c
        JOIN tuition_info t ON c.college_id = t.college_id
        GROUP BY c.state
        ORDER BY avg_out_state DESC, c.state
        """
    ).fetchall()


def avg_early_pay_by_type(conn: Connection):
    return conn.execute(
        """
        SELECT t.institution_type, AVG(s.early_career_pay) AS avg_early_pay
        FROM tuition_info t
        JOIN salary_potential s ON t.college_id = s.college_id
        GROUP BY t.institution_type
        ORDER BY avg_early_pay DESC, t.institution_type
        """
    ).fetchall()


def top_states_by_minority(conn: Connection):
    # average headcount of minority students per college, not a percentage
    return conn.execute(
        """
        SELECT c.state, AVG(d.total_minority) AS avg_minority
        FROM colleges c
        JOIN diversity_stats d ON c.college_id = d.college_id
        GROUP BY c.state
        ORDER BY avg_minority DESC, c.state
        LIMIT ?
        """,
        (TOP_STATES,),
    ).fetchall()


# ---------------- comparisons against an average ----------------

def above_avg_early_pay(conn: Connection):
    return conn.execute(
        """
        SELECT c.name, s.early_career_pay
        FROM colleges c
        JOIN salary_potential s ON c.college_id = s.college_id
        WHERE s.early_career_pay > (SELECT AVG(early_career_pay) FROM salary_potential)
        ORDER BY c.name
        """
    ).fetchall()


def above_avg_minority(conn: Connection):
    return conn.execute(
        """
        SELECT c.name, d.total_minority
        FROM colleges c
        JOIN diversity_stats d ON c.college_id = d.college_id
        WHERE d.total_minority > (SELECT AVG(total_minority) FROM diversity_stats)
        ORDER BY c.name
        """
    ).fetchall()


def largest_pay_growth(conn: Connection):
    return conn.execute(
        """
        SELECT c.name, (s.mid_career_pay - s.early_career_pay) AS pay_growth
        FROM colleges c
        JOIN salary_potential s ON c.college_id = s.college_id
        ORDER BY pay_growth DESC, c.name
        LIMIT ?
        """,
        (TOP_N,),
    ).fetchall()


def public_most_diverse(conn: Connection):
    return conn.execute(
        """
        SELECT c.name, d.total_minority
        FROM colleges c
        JOIN tuition_info t ON c.college_id = t.college_id
        JOIN diversity_stats d ON c.college_id = d.college_id
        WHERE t.institution_type LIKE '%Public%'
        ORDER BY d.total_minority DESC, c.name
        LIMIT ?
        """,
        (TOP_N,),
    ).fetchall()


def private_lowest_cost(conn: Connection):
    return conn.execute(
        """
        SELECT c.name, t.in_state_total
        FROM colleges c
        JOIN tuition_info t ON c.college_id = t.college_id
        WHERE t.institution_type LIKE '%Private%'
        ORDER BY t.in_state_total ASC, c.name
        LIMIT ?
        """,
        (TOP_N,),
    ).fetchall()


def women_below_half(conn: Connection):
    """Colleges where women are under half of total enrollment.

    `women` is a headcount, so the share is computed against total_enrollment.
    Colleges reporting zero enrollment have no share and are left out.
    """
    return conn.execute(
        """
        SELECT c.name, d.women,
               ROUND(d.women * 100.0 / d.total_enrollment, 2) AS women_percent
        FROM colleges c
        JOIN diversity_stats d ON c.college_id = d.college_id
        WHERE d.total_enrollment > 0
          AND d.women * 100.0 / d.total_enrollment < ?
        ORDER BY c.name
        """,
        (WOMEN_SHARE_PCT,),
    ).fetchall()


def avg_mid_pay_large_colleges(conn: Connection) -> Optional[float]:
    """Average mid-career pay of colleges with more than LARGE_ENROLLMENT students; None when no college qualifies."""
    row = conn.execute(
        """
        SELECT AVG(s.mid_career_pay) AS avg_mid_pay_large_colleges
        FROM colleges c
        JOIN salary_potential s ON c.college_id = s.college_id
        JOIN diversity_stats d ON c.college_id = d.college_id
        WHERE d.total_enrollment > ?
        """,
        (LARGE_ENROLLMENT,),
    ).fetchone()
    return row["avg_mid_pay_large_colleges"]


def below_type_avg_tuition(conn: Connection):
    """Colleges whose in-state tuition is under the average for their institution type."""
    return conn.execute(
        """
        SELECT c.name, c.state, t.in_state_tuition
        FROM colleges c
        JOIN tuition_info t ON c.college_id = t.college_id
        WHERE t.in_state_tuition < (
          SELECT AVG(t2.in_state_tuition)
          FROM tuition_info t2
          WHERE t2.institution_type = t.institution_type
        )
        ORDER BY c.state, c.name
        """
    ).fetchall()
