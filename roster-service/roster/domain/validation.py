import re
from urllib.parse import quote

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PLACEHOLDER_IMAGE = "https://picsum.photos/seed/{seed}/200/200"

NAME_HINT = "Enter at least 2 chars"
EMAIL_HINT = "Enter valid email"
COURSE_HINT = "Select a course"
COURSES_LOADING_HINT = "Courses are still loading"
COURSES_ERROR_HINT = "Error loading courses"


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value or ""))


def placeholder_image(name: str) -> str:
    # same escaping as encodeURIComponent
    return PLACEHOLDER_IMAGE.format(seed=quote(name or "student", safe="!'()*~"))


def validate_student(name: str, email: str, course: str) -> dict[str, str]:
    """Return field -> hint for every invalid field; empty when the form is valid."""
    errors: dict[str, str] = {}
    if len((name or "").strip()) <= 1:
        errors["name"] = NAME_HINT
    if not is_valid_email(email):
        errors["email"] = EMAIL_HINT
    if not course:
        errors["course"] = COURSE_HINT
    return errors
