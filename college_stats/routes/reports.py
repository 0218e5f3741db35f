from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..errors import UnknownReportError
from ..services.report_svc import get_report, list_reports, run_report

router = APIRouter()


@router.get("/api/report/list")
def api_report_list():
    return {"items": list_reports()}


@router.get("/api/report/{name}")
def api_report_run(name: str):
    try:
        report = get_report(name)
        data = run_report(name)
    except UnknownReportError as e:
        raise HTTPException(status_code=404, detail=str(e))
    if report.scalar:
        return {"name": name, "value": data["value"]}
    return {"name": name, "total": len(data), "items": data}
