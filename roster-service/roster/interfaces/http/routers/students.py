from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from ....application.roster_store import RosterStore
from ....application.use_cases.save_student import SaveStudent, StudentForm
from ....domain.errors import StudentNotFound, StudentValidationError
from ....infrastructure.course_source import CourseCatalog
from ..deps import get_catalog, get_store
from ..schemas import StudentIn, StudentOut, StatsOut

router = APIRouter(prefix="/api", tags=["students"])

def _save(store: RosterStore, catalog: CourseCatalog, payload: StudentIn, student_id: str | None = None):
    uc = SaveStudent(store, catalog)
    try:
        record = uc.execute(StudentForm(**payload.model_dump()), student_id=student_id)
    except StudentValidationError as e:
        return JSONResponse(status_code=422, content={"errors": e.errors})
    except StudentNotFound:
        raise HTTPException(404, "student not found")
    return StudentOut.model_validate(record)

@router.get("/students", response_model=list[StudentOut])
def list_students(store: RosterStore = Depends(get_store)):
    return [StudentOut.model_validate(r) for r in store.roster]

@router.get("/students/{student_id}", response_model=StudentOut)
def get_student(student_id: str, store: RosterStore = Depends(get_store)):
    record = store.get(student_id)
    if record is None: raise HTTPException(404, "student not found")
    return StudentOut.model_validate(record)

@router.post("/students", response_model=StudentOut, status_code=status.HTTP_201_CREATED,
             responses={422: {"description": "Field-level validation hints"}})
def create_student(payload: StudentIn, store: RosterStore = Depends(get_store),
                   catalog: CourseCatalog = Depends(get_catalog)):
    return _save(store, catalog, payload)

@router.put("/students/{student_id}", response_model=StudentOut,
            responses={422: {"description": "Field-level validation hints"}})
def update_student(student_id: str, payload: StudentIn, store: RosterStore = Depends(get_store),
                   catalog: CourseCatalog = Depends(get_catalog)):
    return _save(store, catalog, payload, student_id=student_id)

@router.delete("/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(student_id: str, store: RosterStore = Depends(get_store)):
    # unknown ids are a no-op, not a 404
    store.remove(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/stats", response_model=StatsOut)
def stats(store: RosterStore = Depends(get_store)):
    return StatsOut(total=len(store.roster), by_course=store.course_counts())
