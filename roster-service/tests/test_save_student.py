import os
import sys
import pytest

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

from roster.application.roster_store import RosterStore
from roster.application.use_cases.save_student import SaveStudent, StudentForm
from roster.domain.errors import StudentNotFound, StudentValidationError
from roster.domain.validation import is_valid_email, placeholder_image, validate_student
from roster.domain.entities import Course
from roster.infrastructure.course_source import CourseCatalog
from roster.infrastructure.storage import MemoryKeyValueStore


@pytest.mark.parametrize("email,ok", [
    ("a@b.co", True),
    ("first.last@uni.example.org", True),
    ("a@b", False),
    ("a b@c.com", False),
    ("@b.com", False),
    ("", False),
])
def test_email_shape(email, ok):
    assert is_valid_email(email) is ok


def test_validate_reports_every_bad_field():
    assert validate_student(" A ", "nope", "") == {
        "name": "Enter at least 2 chars",
        "email": "Enter valid email",
        "course": "Select a course",
    }
    assert validate_student("Al", "a@b.co", "HTML Basics") == {}


def test_placeholder_image_is_deterministic():
    assert placeholder_image("Ann Lee") == "https://picsum.photos/seed/Ann%20Lee/200/200"
    assert placeholder_image("") == "https://picsum.photos/seed/student/200/200"
    assert placeholder_image("a/b") == "https://picsum.photos/seed/a%2Fb/200/200"


@pytest.fixture
def store():
    s = RosterStore(MemoryKeyValueStore())
    s.load()
    return s


def test_create_builds_record(store):
    uc = SaveStudent(store, id_factory=lambda: "fixed-id")
    record = uc.execute(StudentForm(name="  Ann  ", email="a@b.com", course="CSS Mastery"))

    assert record.id == "fixed-id"
    assert record.name == "Ann"
    assert record.email == "a@b.com"
    assert record.image == "https://picsum.photos/seed/Ann/200/200"
    assert store.roster == (record,)


def test_create_keeps_given_image(store):
    record = SaveStudent(store).execute(
        StudentForm(name="Ann", email="a@b.com", course="CSS Mastery", image=" http://x/y.png "))
    assert record.image == "http://x/y.png"
    assert record.id


def test_edit_keeps_id_and_position(store):
    ids = iter(["1", "2"])
    uc = SaveStudent(store, id_factory=lambda: next(ids))
    uc.execute(StudentForm(name="Ann", email="a@b.com", course="CSS Mastery"))
    uc.execute(StudentForm(name="Bob", email="b@b.com", course="HTML Basics"))

    edited = uc.execute(StudentForm(name="Annie", email="a@b.com", course="React In Depth"), student_id="1")

    assert edited.id == "1"
    assert [r.name for r in store.roster] == ["Bob", "Annie"]


def test_invalid_form_is_not_saved(store):
    with pytest.raises(StudentValidationError) as exc:
        SaveStudent(store).execute(StudentForm(name="A", email="a@b", course="CSS Mastery"))
    assert set(exc.value.errors) == {"name", "email"}
    assert store.roster == ()


def test_edit_unknown_id(store):
    with pytest.raises(StudentNotFound):
        SaveStudent(store).execute(StudentForm(name="Ann", email="a@b.com", course="X"), student_id="ghost")


def ready_catalog():
    catalog = CourseCatalog(delay=0, failure_rate=0)
    catalog.courses = [Course(1, "HTML Basics"), Course(2, "CSS Mastery")]
    return catalog


def test_course_must_come_from_catalog(store):
    uc = SaveStudent(store, ready_catalog())
    with pytest.raises(StudentValidationError) as exc:
        uc.execute(StudentForm(name="Ann", email="a@b.com", course="Underwater Basket"))
    assert exc.value.errors == {"course": "Select a course"}

    record = uc.execute(StudentForm(name="Ann", email="a@b.com", course="CSS Mastery"))
    assert store.roster == (record,)


@pytest.mark.parametrize("loading,error,hint", [
    (True, "", "Courses are still loading"),
    (False, "Network error fetching courses", "Error loading courses"),
])
def test_unavailable_catalog_blocks_course(store, loading, error, hint):
    """No course can be chosen while the list is loading or failed"""
    catalog = ready_catalog()
    catalog.loading = loading
    catalog.error = error

    with pytest.raises(StudentValidationError) as exc:
        SaveStudent(store, catalog).execute(StudentForm(name="Ann", email="a@b.com", course="CSS Mastery"))
    assert exc.value.errors == {"course": hint}
    assert store.roster == ()


def test_edit_may_keep_course_while_catalog_failed(store):
    ids = iter(["1"])
    SaveStudent(store, ready_catalog(), id_factory=lambda: next(ids)).execute(
        StudentForm(name="Ann", email="a@b.com", course="CSS Mastery"))
    failed = CourseCatalog(delay=0, failure_rate=1)
    failed.error = "Network error fetching courses"
    uc = SaveStudent(store, failed)

    edited = uc.execute(StudentForm(name="Annie", email="a@b.com", course="CSS Mastery"), student_id="1")
    assert edited.name == "Annie"

    with pytest.raises(StudentValidationError) as exc:
        uc.execute(StudentForm(name="Annie", email="a@b.com", course="HTML Basics"), student_id="1")
    assert exc.value.errors == {"course": "Error loading courses"}
