"""
FastAPI app entry point aggregating routers under college_stats/routes.
Run with `uvicorn college_stats.api:app`.
"""
from __future__ import annotations


from fastapi import FastAPI

from . import __version__
from .logs import ensure_log_schema
from .schema import ensure_schema


app = FastAPI(title="college-stats-api", version=__version__)


@app.on_event("startup")
def on_startup():
    ensure_schema()
    ensure_log_schema()


from .routes import base as base_routes
from .routes import colleges as college_routes
from .routes import reports as report_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(college_routes.router)
app.include_router(report_routes.router)
app.include_router(logs_routes.router)
