import uuid
from dataclasses import dataclass
from typing import Callable

from ...domain.entities import StudentRecord
from ...domain.errors import StudentNotFound, StudentValidationError
from ...domain.validation import (
    COURSE_HINT,
    COURSES_ERROR_HINT,
    COURSES_LOADING_HINT,
    validate_student,
    placeholder_image,
)
from ...infrastructure.course_source import CourseCatalog
from ..roster_store import RosterStore


@dataclass
class StudentForm:
    name: str
    email: str
    course: str = ""
    image: str = ""


def new_id() -> str:
    return uuid.uuid4().hex


def course_hint(catalog: CourseCatalog, course: str) -> str | None:
    """Why ``course`` cannot be picked from the catalog right now, or None if it can."""
    if catalog.loading:
        return COURSES_LOADING_HINT
    if catalog.error:
        return COURSES_ERROR_HINT
    if course not in {c.name for c in catalog.courses}:
        return COURSE_HINT
    return None


class SaveStudent:
    """Create or edit a student from a submitted form.

    With a catalog, the course has to be one the catalog currently offers.
    An edit may always keep the course the record already has.
    """

    def __init__(self, store: RosterStore, catalog: CourseCatalog | None = None,
                 id_factory: Callable[[], str] = new_id):
        self.store = store
        self.catalog = catalog
        self.id_factory = id_factory

    def execute(self, form: StudentForm, student_id: str | None = None) -> StudentRecord:
        current = None
        if student_id is not None:
            current = self.store.get(student_id)
            if current is None:
                raise StudentNotFound(student_id)

        errors = validate_student(form.name, form.email, form.course)
        keeps_course = current is not None and form.course == current.course
        if self.catalog is not None and "course" not in errors and not keeps_course:
            hint = course_hint(self.catalog, form.course)
            if hint:
                errors["course"] = hint
        if errors:
            raise StudentValidationError(errors)

        name = form.name.strip()
        record = StudentRecord(
            id=student_id if student_id is not None else self.id_factory(),
            name=name,
            email=form.email.strip(),
            course=form.course,
            image=form.image.strip() or placeholder_image(name),
        )
        self.store.upsert(record)
        return record
