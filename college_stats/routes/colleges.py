from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from ..errors import (
    CollegeNotFoundError,
    CollegeStatsError,
    ReferentialIntegrityError,
    UniquenessError,
)
from ..logs import LogContext, search_logs
from ..services.college_svc import (
    create_college,
    delete_college,
    get_college_profile,
    list_colleges,
    set_diversity,
    set_salary,
    set_tuition,
    update_college as svc_update_college,
)

router = APIRouter()


class TuitionBody(BaseModel):
    institution_type: str = Field(..., max_length=100)
    degree_length: str = Field(..., max_length=50)
    in_state_tuition: int = Field(..., ge=0)
    in_state_total: int = Field(..., ge=0)
    out_of_state_tuition: int = Field(..., ge=0)
    out_of_state_total: int = Field(..., ge=0)


class DiversityBody(BaseModel):
    total_enrollment: int = Field(..., ge=0)
    women: int = Field(..., ge=0)  # headcount
    american_indian_alaska_native: int = Field(..., ge=0)
    asian: int = Field(..., ge=0)
    black: int = Field(..., ge=0)
    hispanic: int = Field(..., ge=0)
    hawaiian_native_pacific_islander: int = Field(..., ge=0)
    white: int = Field(..., ge=0)
    two_or_more: int = Field(..., ge=0)
    unknown_race: int = Field(..., ge=0)
    non_resident_foreign: int = Field(..., ge=0)
    total_minority: int = Field(..., ge=0)


class SalaryBody(BaseModel):
    early_career_pay: int = Field(..., ge=0)
    mid_career_pay: int = Field(..., ge=0)
    stem_percent: int = Field(..., ge=0, le=100)


class CollegeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=50)
    tuition: Optional[TuitionBody] = None
    diversity: Optional[DiversityBody] = None
    salary: Optional[SalaryBody] = None


class CollegeUpdate(BaseModel):
    college_id: int
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=50)


class CollegeDelete(BaseModel):
    college_id: int


def _raise_http(e: Exception):
    if isinstance(e, CollegeNotFoundError):
        raise HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (UniquenessError, ReferentialIntegrityError)):
        raise HTTPException(status_code=409, detail=str(e))
    if isinstance(e, (ValueError, CollegeStatsError)):
        raise HTTPException(status_code=400, detail=str(e))
    raise HTTPException(status_code=500, detail=str(e))


@router.get("/api/college/list")
def api_college_list(q: str | None = None, state: str | None = None):
    return list_colleges(q, state)


@router.get("/api/college/{college_id}")
def api_college_get(college_id: int):
    try:
        return get_college_profile(college_id)
    except CollegeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/api/college/create", status_code=201)
def api_college_create(body: CollegeCreate):
    log = LogContext("CREATE_COLLEGE")
    log.set_payload(body.model_dump())
    try:
        new_id = create_college(
            body.name,
            body.state,
            log,
            tuition=body.tuition.model_dump() if body.tuition else None,
            diversity=body.diversity.model_dump() if body.diversity else None,
            salary=body.salary.model_dump() if body.salary else None,
        )
        log.write("OK")
        return {"message": "ok", "college_id": new_id}
    except Exception as e:
        log.write("ERROR", str(e))
        _raise_http(e)


@router.post("/api/college/update")
def api_college_update(body: CollegeUpdate):
    log = LogContext("UPDATE_COLLEGE")
    log.set_payload(body.model_dump())
    log.set_entity("COLLEGE", body.college_id)
    try:
        item = svc_update_college(body.college_id, name=body.name, state=body.state, log=log)
        log.write("OK")
        return {"message": "ok", "item": item}
    except Exception as e:
        log.write("ERROR", str(e))
        _raise_http(e)


@router.post("/api/college/delete")
def api_college_delete(body: CollegeDelete):
    log = LogContext("DELETE_COLLEGE")
    log.set_payload(body.model_dump())
    log.set_entity("COLLEGE", body.college_id)
    try:
        delete_college(body.college_id, log)
        log.write("OK")
        return {"message": "ok"}
    except Exception as e:
        log.write("ERROR", str(e))
        _raise_http(e)


@router.post("/api/college/{college_id}/tuition")
def api_college_tuition(college_id: int, body: TuitionBody):
    log = LogContext("SET_TUITION")
    log.set_payload(body.model_dump())
    log.set_entity("COLLEGE", college_id)
    try:
        item = set_tuition(college_id, body.model_dump(), log)
        log.write("OK")
        return {"message": "ok", "item": item}
    except Exception as e:
        log.write("ERROR", str(e))
        _raise_http(e)


@router.post("/api/college/{college_id}/diversity")
def api_college_diversity(college_id: int, body: DiversityBody):
    log = LogContext("SET_DIVERSITY")
    log.set_payload(body.model_dump())
    log.set_entity("COLLEGE", college_id)
    try:
        item = set_diversity(college_id, body.model_dump(), log)
        log.write("OK")
        return {"message": "ok", "item": item}
    except Exception as e:
        log.write("ERROR", str(e))
        _raise_http(e)


@router.post("/api/college/{college_id}/salary")
def api_college_salary(college_id: int, body: SalaryBody):
    log = LogContext("SET_SALARY")
    log.set_payload(body.model_dump())
    log.set_entity("COLLEGE", college_id)
    try:
        item = set_salary(college_id, body.model_dump(), log)
        log.write("OK")
        return {"message": "ok", "item": item}
    except Exception as e:
        log.write("ERROR", str(e))
        _raise_http(e)


@router.get("/api/college/{college_id}/history")
def api_college_history(college_id: int, page: int = 1, size: int = 20):
    """Audit entries for one college, including failed attempts, newest first."""
    total, items = search_logs(entity_type="COLLEGE", entity_id=college_id, page=page, size=size)
    return {"total": total, "items": items}
