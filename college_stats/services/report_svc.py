"""
Report catalog: named, parameterless reads over the college statistics schema.
Each entry wraps one function of reporting_repo and names the columns it returns,
so an empty result still exports with a header row.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from ..db import get_conn
from ..errors import UnknownReportError
from ..repository import reporting_repo as rr

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Report:
    name: str
    title: str
    description: str
    runner: Callable
    columns: Tuple[str, ...]
    scalar: bool = False


_CATALOG = [
    Report("colleges_with_tuition", "Colleges and their tuition",
           "In-state and out-of-state tuition per college.", rr.colleges_with_tuition,
           ("name", "state", "in_state_tuition", "out_of_state_tuition")),
    Report("colleges_with_diversity", "Colleges and their diversity",
           "Total enrollment and minority enrollment per college.", rr.colleges_with_diversity,
           ("name", "total_enrollment", "total_minority")),
    Report("colleges_with_salary", "Colleges and salary potential",
           "Early and mid-career pay per college.", rr.colleges_with_salary,
           ("name", "early_career_pay", "mid_career_pay")),
    Report("top_mid_career_pay", "Highest mid-career salaries",
           "Top 10 colleges by mid-career pay.", rr.top_mid_career_pay,
           ("name", "mid_career_pay")),
    Report("college_summary", "College summary",
           "Tuition and salary figures side by side for colleges that have both.", rr.college_summary,
           ("name", "state", "institution_type", "degree_length", "in_state_tuition",
            "out_of_state_tuition", "early_career_pay", "mid_career_pay", "stem_percent")),
    Report("lowest_in_state_tuition", "Lowest in-state tuition",
           "Ten most affordable colleges for in-state students.", rr.lowest_in_state_tuition,
           ("name", "state", "in_state_tuition")),
    Report("highest_early_career_pay", "Highest early-career pay",
           "Ten colleges with the best starting salaries.", rr.highest_early_career_pay,
           ("name", "early_career_pay")),
    Report("highest_stem_percent", "Highest STEM share",
           "Ten colleges with the largest share of STEM graduates.", rr.highest_stem_percent,
           ("name", "stem_percent")),
    Report("two_year_high_mid_pay", "2-year colleges with high mid-career pay",
           "Ten 2-year colleges with the highest mid-career pay.", rr.two_year_high_mid_pay,
           ("name", "mid_career_pay")),
    Report("avg_tuition_by_state", "Average tuition by state",
           "Average in-state and out-of-state tuition per state.", rr.avg_tuition_by_state,
           ("state", "avg_in_state", "avg_out_state")),
    Report("avg_early_pay_by_type", "Average early-career pay by institution type",
           "Public vs private starting salary comparison.", rr.avg_early_pay_by_type,
           ("institution_type", "avg_early_pay")),
    Report("top_states_by_minority", "States with highest minority enrollment",
           "Five states with the highest average minority enrollment per college.", rr.top_states_by_minority,
           ("state", "avg_minority")),
    Report("above_avg_early_pay", "Above-average early-career pay",
           "Colleges beating the overall early-career pay average.", rr.above_avg_early_pay,
           ("name", "early_career_pay")),
    Report("above_avg_minority", "Above-average minority enrollment",
           "Colleges above the overall average minority enrollment.", rr.above_avg_minority,
           ("name", "total_minority")),
    Report("largest_pay_growth", "Largest pay growth",
           "Ten colleges with the largest mid minus early career pay.", rr.largest_pay_growth,
           ("name", "pay_growth")),
    Report("public_most_diverse", "Most diverse public colleges",
           "Ten public colleges with the highest minority enrollment.", rr.public_most_diverse,
           ("name", "total_minority")),
    Report("private_lowest_cost", "Lowest-cost private colleges",
           "Ten private colleges with the lowest in-state total cost.", rr.private_lowest_cost,
           ("name", "in_state_total")),
    Report("women_below_half", "Women below half of enrollment",
           "Colleges where women make up less than 50% of total enrollment.", rr.women_below_half,
           ("name", "women", "women_percent")),
    Report("avg_mid_pay_large_colleges", "Mid-career pay at large colleges",
           "Average mid-career pay for colleges with more than 20,000 students.",
           rr.avg_mid_pay_large_colleges, ("avg_mid_pay_large_colleges",), scalar=True),
    Report("below_type_avg_tuition", "Tuition below institution-type average",
           "Colleges cheaper than the average in-state tuition of their institution type.",
           rr.below_type_avg_tuition, ("name", "state", "in_state_tuition")),
]

REPORTS: Dict[str, Report] = {r.name: r for r in _CATALOG}


def list_reports() -> List[dict]:
    return [
        {"name": r.name, "title": r.title, "description": r.description,
         "columns": list(r.columns), "scalar": r.scalar}
        for r in _CATALOG
    ]


def get_report(name: str) -> Report:
    try:
        return REPORTS[name]
    except KeyError:
        raise UnknownReportError(f"unknown report: {name}") from None


def run_report(name: str, db_path: Optional[str] = None) -> Any:
    """Rows as a list of dicts; the scalar report returns {"value": x} with x None when no data."""
    report = get_report(name)
    with get_conn(db_path) as conn:
        result = report.runner(conn)
    if report.scalar:
        logger.debug("report %s -> %r", name, result)
        return {"value": result}
    rows = [dict(r) for r in result]
    logger.debug("report %s -> %d rows", name, len(rows))
    return rows


def report_frame(name: str, db_path: Optional[str] = None) -> pd.DataFrame:
    report = get_report(name)
    data = run_report(name, db_path)
    if report.scalar:
        return pd.DataFrame([{report.columns[0]: data["value"]}])
    return pd.DataFrame(data, columns=list(report.columns))


def export_report(name: str, out_dir: str, db_path: Optional[str] = None) -> str:
    """Write the report as CSV into out_dir and return the file path."""
    df = report_frame(name, db_path)
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, f"{name}.csv")
    df.to_csv(path, index=False, encoding="utf-8")
    logger.info("exported %s (%d rows) to %s", name, len(df), path)
    return path
