from dataclasses import dataclass, asdict

UNASSIGNED = "Unassigned"


@dataclass(frozen=True)
class StudentRecord:
    id: str
    name: str
    email: str
    course: str = ""
    image: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Course:
    id: int
    name: str


Roster = tuple[StudentRecord, ...]
