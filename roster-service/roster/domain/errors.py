class RosterError(Exception):
    """Base class for roster service errors."""


class StorageError(RosterError):
    """The key-value backend could not be read or written."""


class StudentNotFound(RosterError):
    def __init__(self, student_id: str):
        super().__init__(f"student {student_id!r} not found")
        self.student_id = student_id


class StudentValidationError(RosterError):
    def __init__(self, errors: dict[str, str]):
        super().__init__("invalid student form")
        self.errors = errors


class CourseFetchError(RosterError):
    """Simulated network failure while loading the course list."""
