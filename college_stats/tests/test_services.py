from __future__ import annotations

import pandas as pd
import pytest

from college_stats.db import get_conn
from college_stats.errors import (
    CollegeNotFoundError,
    ReferentialIntegrityError,
    UniquenessError,
    UnknownReportError,
)
from college_stats.logs import LogContext, search_logs
from college_stats.services import college_svc, report_svc

from conftest import diversity, salary, tuition


def test_create_college_with_profiles():
    log = LogContext("TEST_CREATE")
    cid = college_svc.create_college("Alpha", "CA", log, tuition=tuition(), salary=salary())
    profile = college_svc.get_college_profile(cid)
    assert profile["name"] == "Alpha"
    assert profile["tuition"]["institution_type"] == "Public"
    assert profile["salary"]["mid_career_pay"] == 90000
    assert profile["diversity"] is None
    assert log.entity_id == str(cid)


def test_create_college_is_all_or_nothing():
    bad = salary()
    del bad["stem_percent"]
    with pytest.raises(ValueError):
        college_svc.create_college("Alpha", "CA", LogContext("TEST"), tuition=tuition(), salary=bad)
    with get_conn() as conn:
        assert conn.execute("SELECT COUNT(1) AS c FROM colleges").fetchone()["c"] == 0
        assert conn.execute("SELECT COUNT(1) AS c FROM tuition_info").fetchone()["c"] == 0


def test_create_duplicate_college():
    college_svc.create_college("Alpha", "CA", LogContext("TEST"))
    with pytest.raises(UniquenessError):
        college_svc.create_college("Alpha", "CA", LogContext("TEST"))


def test_set_profile_inserts_then_updates():
    cid = college_svc.create_college("Alpha", "CA", LogContext("TEST"))
    log = LogContext("SET")
    after = college_svc.set_diversity(cid, diversity(women=4000), log)
    assert after["women"] == 4000
    assert log.before is None

    log = LogContext("SET")
    after = college_svc.set_diversity(cid, {"women": 4100}, log)
    assert after["women"] == 4100
    assert log.before["women"] == 4000


def test_set_profile_for_missing_college():
    with pytest.raises(ReferentialIntegrityError):
        college_svc.set_salary(999, salary(), LogContext("SET"))


def test_update_and_delete():
    cid = college_svc.create_college("Alpha", "CA", LogContext("TEST"), tuition=tuition())
    item = college_svc.update_college(cid, state="OR", log=LogContext("UPD"))
    assert item == {"college_id": cid, "name": "Alpha", "state": "OR"}

    log = LogContext("DEL")
    college_svc.delete_college(cid, log)
    assert log.before["tuition"]["college_id"] == cid
    with pytest.raises(CollegeNotFoundError):
        college_svc.get_college_profile(cid)
    with pytest.raises(CollegeNotFoundError):
        college_svc.update_college(cid, name="Ghost", log=LogContext("UPD"))


def test_log_context_writes_operation_log():
    log = LogContext("CREATE_COLLEGE")
    log.set_payload({"name": "Alpha"})
    college_svc.create_college("Alpha", "CA", log)
    log.write("OK")
    total, items = search_logs(q="Alpha", action="CREATE_COLLEGE")
    assert total == 1
    assert items[0]["result"] == "OK"
    assert items[0]["after"]["state"] == "CA"
    assert "after_json" not in items[0]


def test_report_catalog_has_twenty_entries():
    names = [r["name"] for r in report_svc.list_reports()]
    assert len(names) == 20
    assert len(set(names)) == 20
    assert [r["name"] for r in report_svc.list_reports() if r["scalar"]] == ["avg_mid_pay_large_colleges"]


def test_run_report_rows_and_scalar(add_college):
    add_college("Alpha", tuition=tuition(), diversity=diversity(total_enrollment=25000), salary=salary())
    rows = report_svc.run_report("college_summary")
    assert rows == [{
        "name": "Alpha", "state": "CA", "institution_type": "Public", "degree_length": "4 Years",
        "in_state_tuition": 10000, "out_of_state_tuition": 30000,
        "early_career_pay": 50000, "mid_career_pay": 90000, "stem_percent": 20,
    }]
    assert report_svc.run_report("avg_mid_pay_large_colleges") == {"value": 90000}


def test_scalar_report_without_data_is_none():
    assert report_svc.run_report("avg_mid_pay_large_colleges") == {"value": None}


def test_unknown_report():
    with pytest.raises(UnknownReportError):
        report_svc.run_report("no_such_report")


def test_export_report_csv(add_college, tmp_path):
    add_college("Alpha", "CA", tuition=tuition(out_of_state_tuition=30000))
    add_college("Beta", "CA", tuition=tuition(out_of_state_tuition=50000))
    path = report_svc.export_report("avg_tuition_by_state", str(tmp_path / "out"))
    df = pd.read_csv(path)
    assert list(df.columns) == ["state", "avg_in_state", "avg_out_state"]
    assert df.loc[0, "avg_out_state"] == pytest.approx(40000)


def test_search_logs_by_college():
    a = college_svc.create_college("Alpha", "CA", LogContext("TEST"))
    b = college_svc.create_college("Beta", "CA", LogContext("TEST"))
    for cid, action in ((a, "SET_SALARY"), (b, "SET_SALARY"), (a, "UPDATE_COLLEGE")):
        log = LogContext(action)
        log.set_entity("COLLEGE", cid)
        log.write("OK")
    total, items = search_logs(entity_type="COLLEGE", entity_id=a)
    assert total == 2
    assert [i["action"] for i in items] == ["UPDATE_COLLEGE", "SET_SALARY"]
    assert {i["entity_id"] for i in items} == {str(a)}
    total, _ = search_logs(entity_type="COLLEGE", entity_id=str(b), action="UPDATE_COLLEGE")
    assert total == 0


def test_export_empty_report_keeps_header(tmp_path):
    path = report_svc.export_report("top_mid_career_pay", str(tmp_path))
    with open(path, encoding="utf-8") as f:
        assert f.read().splitlines() == ["name,mid_career_pay"]


def test_report_columns_match_rows(add_college):
    add_college("Alpha", tuition=tuition(degree_length="2 Years"),
                diversity=diversity(total_enrollment=30000, women=3000, total_minority=5000),
                salary=salary(early_career_pay=60000))
    add_college("Beta", "NY", tuition=tuition(institution_type="Private", in_state_tuition=30000),
                diversity=diversity(total_minority=100), salary=salary(early_career_pay=40000))
    add_college("Gamma", "OR", tuition=tuition(in_state_tuition=20000),
                diversity=diversity(total_minority=100), salary=salary())
    for r in report_svc.list_reports():
        if r["scalar"]:
            continue
        rows = report_svc.run_report(r["name"])
        assert rows, r["name"]
        assert list(rows[0]) == r["columns"], r["name"]
        assert list(report_svc.report_frame(r["name"]).columns) == r["columns"]
