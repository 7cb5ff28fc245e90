import asyncio
import random

import structlog

from ..domain.entities import Course
from ..domain.errors import CourseFetchError
from .metrics import course_fetch_total

logger = structlog.get_logger()

COURSES = (
    Course(id=1, name="HTML Basics"),
    Course(id=2, name="CSS Mastery"),
    Course(id=3, name="JavaScript Pro"),
    Course(id=4, name="React In Depth"),
)


async def fetch_courses(delay: float = 0.8, failure_rate: float = 0.1,
                        rng: random.Random | None = None) -> list[Course]:
    """Pretend to download the course list.

    The outcome is drawn before the delay, so the caller waits the same
    amount of time whether the call succeeds or fails.
    """
    should_fail = (rng or random).random() < failure_rate
    await asyncio.sleep(delay)
    if should_fail:
        raise CourseFetchError("Network error fetching courses")
    return list(COURSES)


class CourseCatalog:
    """Course list as seen by the student form: loading, failed or ready.

    A failed load stays failed until someone calls ``load`` again; nothing
    retries on its own. Once ``close`` is called, a fetch that is still in
    flight finishes but its result is thrown away.
    """

    def __init__(self, delay: float = 0.8, failure_rate: float = 0.1,
                 rng: random.Random | None = None):
        self.delay = delay
        self.failure_rate = failure_rate
        self.rng = rng
        self.courses: list[Course] = []
        self.loading = False
        self.error = ""
        self.live = True

    @property
    def selectable(self) -> bool:
        return not self.loading and not self.error

    async def load(self) -> None:
        self.loading = True
        self.error = ""
        try:
            courses = await fetch_courses(self.delay, self.failure_rate, self.rng)
        except CourseFetchError as e:
            course_fetch_total.labels(outcome="error").inc()
            if not self.live:
                logger.info("course_result_discarded", outcome="error")
                return
            logger.warning("course_fetch_failed", error=str(e))
            self.error = str(e)
        else:
            course_fetch_total.labels(outcome="ok").inc()
            if not self.live:
                logger.info("course_result_discarded", outcome="ok")
                return
            logger.info("courses_loaded", count=len(courses))
            self.courses = courses
        finally:
            if self.live:
                self.loading = False

    def close(self) -> None:
        self.live = False

    def snapshot(self) -> dict:
        return {
            "loading": self.loading,
            "error": self.error,
            "courses": [{"id": c.id, "name": c.name} for c in self.courses],
        }
