from college_stats.db import get_conn

from conftest import diversity, salary, tuition


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "college-stats-api"


def test_create_college_with_profiles(client):
    payload = {
        "name": "Alpha University",
        "state": "CA",
        "tuition": tuition(),
        "diversity": diversity(),
        "salary": salary(),
    }
    res = client.post("/api/college/create", json=payload)
    assert res.status_code == 201
    cid = res.json()["college_id"]

    detail = client.get(f"/api/college/{cid}").json()
    assert detail["name"] == "Alpha University"
    assert detail["diversity"]["total_minority"] == 3270

    with get_conn() as conn:
        row = conn.execute("SELECT result FROM operation_log WHERE action='CREATE_COLLEGE'").fetchone()
        assert row["result"] == "OK"


def test_duplicate_college_conflict(client):
    assert client.post("/api/college/create", json={"name": "Alpha", "state": "CA"}).status_code == 201
    res = client.post("/api/college/create", json={"name": "Alpha", "state": "CA"})
    assert res.status_code == 409
    with get_conn() as conn:
        row = conn.execute(
            "SELECT result, err_msg FROM operation_log WHERE action='CREATE_COLLEGE' ORDER BY id DESC"
        ).fetchone()
        assert row["result"] == "ERROR"
        assert "UNIQUE" in row["err_msg"]


def test_profile_for_missing_college_conflict(client):
    res = client.post("/api/college/777/salary", json=salary())
    assert res.status_code == 409


def test_validation_rejects_negative_and_out_of_range(client):
    res = client.post("/api/college/create", json={"name": "A", "state": "CA", "tuition": tuition(in_state_tuition=-5)})
    assert res.status_code == 422
    cid = client.post("/api/college/create", json={"name": "A", "state": "CA"}).json()["college_id"]
    res = client.post(f"/api/college/{cid}/salary", json=salary(stem_percent=101))
    assert res.status_code == 422


def test_update_delete_and_list(client):
    cid = client.post("/api/college/create", json={"name": "Alpha", "state": "CA", "salary": salary()}).json()["college_id"]
    client.post("/api/college/create", json={"name": "Beta", "state": "NY"})

    res = client.post("/api/college/update", json={"college_id": cid, "name": "Alpha Tech"})
    assert res.status_code == 200
    assert res.json()["item"]["name"] == "Alpha Tech"

    items = client.get("/api/college/list", params={"state": "CA"}).json()
    assert [i["name"] for i in items] == ["Alpha Tech"]

    assert client.post("/api/college/delete", json={"college_id": cid}).status_code == 200
    assert client.get(f"/api/college/{cid}").status_code == 404
    assert client.post("/api/college/delete", json={"college_id": cid}).status_code == 404
    with get_conn() as conn:
        assert conn.execute("SELECT COUNT(1) AS c FROM salary_potential").fetchone()["c"] == 0


def test_report_endpoints(client):
    for name, out_state in (("A", 30000), ("B", 50000)):
        client.post("/api/college/create", json={
            "name": name, "state": "CA", "tuition": tuition(out_of_state_tuition=out_state),
        })

    lst = client.get("/api/report/list").json()["items"]
    assert len(lst) == 20

    res = client.get("/api/report/avg_tuition_by_state").json()
    assert res["total"] == 1
    assert res["items"][0]["avg_out_state"] == 40000

    scalar = client.get("/api/report/avg_mid_pay_large_colleges").json()
    assert scalar == {"name": "avg_mid_pay_large_colleges", "value": None}

    assert client.get("/api/report/nope").status_code == 404


def test_logs_search(client):
    client.post("/api/college/create", json={"name": "Alpha", "state": "CA"})
    client.post("/api/college/create", json={"name": "Alpha", "state": "CA"})
    res = client.get("/api/logs/search", params={"action": "CREATE_COLLEGE"}).json()
    assert res["total"] == 2
    assert [i["result"] for i in res["items"]] == ["ERROR", "OK"]


def test_college_history_includes_failures(client):
    cid = client.post("/api/college/create", json={"name": "Alpha", "state": "CA"}).json()["college_id"]
    client.post("/api/college/create", json={"name": "Beta", "state": "CA"})
    assert client.post("/api/college/update", json={"college_id": cid, "name": "Beta"}).status_code == 409
    assert client.post(f"/api/college/{cid}/salary", json={
        "early_career_pay": 50000, "mid_career_pay": 90000, "stem_percent": 20}).status_code == 200

    res = client.get(f"/api/college/{cid}/history").json()
    assert res["total"] == 3
    assert [(i["action"], i["result"]) for i in res["items"]] == [
        ("SET_SALARY", "OK"), ("UPDATE_COLLEGE", "ERROR"), ("CREATE_COLLEGE", "OK")]
    assert res["items"][1]["payload"]["name"] == "Beta"
    assert res["items"][0]["after"]["mid_career_pay"] == 90000

    by_entity = client.get("/api/logs/search", params={"entity_type": "COLLEGE", "entity_id": cid}).json()
    assert by_entity["total"] == 3
