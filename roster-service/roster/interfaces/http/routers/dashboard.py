from fastapi import APIRouter, Depends, Request

from ....application.roster_store import RosterStore
from ....application.scheduling_demo import run_scheduling_demo
from ..deps import get_store, start_catalog
from ..schemas import DemoOut, StudentOut

router = APIRouter(prefix="/api", tags=["dashboard"])

@router.post("/demo/scheduling", response_model=DemoOut)
async def scheduling_demo():
    return DemoOut(lines=await run_scheduling_demo())

@router.post("/reset", response_model=list[StudentOut])
async def reset(request: Request, store: RosterStore = Depends(get_store)):
    """Wipe all stored data and start over: empty roster, fresh course fetch."""
    store.reset()
    start_catalog(request.app)
    return [StudentOut.model_validate(r) for r in store.roster]
