import asyncio

from fastapi import FastAPI, Request

from ...application.roster_store import RosterStore
from ...config import settings
from ...infrastructure.course_source import CourseCatalog

def get_store(request: Request) -> RosterStore:
    return request.app.state.store

def get_catalog(request: Request) -> CourseCatalog:
    return request.app.state.catalog

def replace_catalog(app: FastAPI) -> CourseCatalog:
    """Swap in a fresh catalog; a fetch still running for the old one gets discarded."""
    old = getattr(app.state, "catalog", None)
    if old is not None:
        old.close()
    catalog = CourseCatalog(
        delay=settings.COURSE_FETCH_DELAY,
        failure_rate=settings.COURSE_FETCH_FAILURE_RATE,
    )
    app.state.catalog = catalog
    return catalog

def start_catalog(app: FastAPI) -> CourseCatalog:
    catalog = replace_catalog(app)
    catalog.loading = True
    # keep a reference so the task is not garbage collected mid-flight
    app.state.catalog_task = asyncio.create_task(catalog.load())
    return catalog
