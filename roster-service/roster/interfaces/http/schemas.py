from pydantic import BaseModel

class StudentIn(BaseModel):
    name: str = ""
    email: str = ""
    course: str = ""
    image: str = ""

class StudentOut(BaseModel):
    id: str
    name: str
    email: str
    course: str
    image: str
    class Config: from_attributes = True

class StatsOut(BaseModel):
    total: int
    by_course: dict[str, int]

class CourseOut(BaseModel):
    id: int
    name: str

class CatalogOut(BaseModel):
    loading: bool
    error: str
    courses: list[CourseOut]

class DemoOut(BaseModel):
    lines: list[str]
