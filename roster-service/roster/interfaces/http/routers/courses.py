from fastapi import APIRouter, Depends, Request

from ....infrastructure.course_source import CourseCatalog
from ..deps import get_catalog, replace_catalog
from ..schemas import CatalogOut

router = APIRouter(prefix="/api/courses", tags=["courses"])

@router.get("", response_model=CatalogOut)
def list_courses(catalog: CourseCatalog = Depends(get_catalog)):
    return catalog.snapshot()

@router.post("/reload", response_model=CatalogOut)
async def reload_courses(request: Request):
    # waits for the fetch so the caller sees the outcome
    catalog = replace_catalog(request.app)
    await catalog.load()
    return catalog.snapshot()
