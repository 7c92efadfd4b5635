"""In-memory catalog state: users, courses and per-user schedules.

One ``CatalogStore`` is created per application instance and handed to the
routes through ``app.state``. The course repository and the schedule index
share one re-entrant lock, so every operation, including enrollment checks
that span both, is atomic when FastAPI runs handlers on its thread pool.
"""

import logging
from threading import RLock
from typing import Any, Iterable

from werkzeug.security import check_password_hash, generate_password_hash

from backend.core.errors import NotFound
from backend.models.course import Course, CourseFields, validate_course_payload
from backend.models.user import Role, User

logger = logging.getLogger(__name__)

COURSE_NOT_FOUND = "Course not found"

SEED_PASSWORD = "Password1!"
SEED_USERS = [
    (1, "teacher@test.com", Role.TEACHER),
    (2, "student@test.com", Role.STUDENT),
]
SEED_COURSES = [
    CourseFields(
        name="Web Development",
        description="Learn the fundamentals of modern web development.",
        subject="WEB",
        credits=3,
    ),
    CourseFields(
        name="Intro to Programming",
        description="Build core programming foundations and problem-solving skills.",
        subject="CS",
        credits=4,
    ),
]


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore:
    """Read-only user directory keyed by case-insensitive email."""

    def __init__(self, users: Iterable[User]) -> None:
        self._users: dict[str, User] = {}
        for user in users:
            key = normalize_email(user.email)
            if key in self._users:
                raise ValueError(f"Duplicate user email: {key}")
            self._users[key] = user

    def get_by_email(self, email: str) -> User | None:
        return self._users.get(normalize_email(email))

    def authenticate(self, email: str, password: str) -> User | None:
        user = self.get_by_email(email)
        if user is None or not check_password_hash(user.hashed_password, password):
            return None
        return user


class CourseRepository:
    """Ordered course collection with a monotonic id counter."""

    def __init__(self, seed: Iterable[CourseFields] = ()) -> None:
        self._courses: list[Course] = []
        self._next_id = 1
        self.lock = RLock()
        for fields in seed:
            self._insert(fields)

    def _insert(self, fields: CourseFields) -> Course:
        course = Course(id=self._next_id, **fields.model_dump())
        self._courses.append(course)
        self._next_id += 1
        return course

    def _find(self, course_id: int) -> Course | None:
        return next((course for course in self._courses if course.id == course_id), None)

    def list_all(self, search: str | None = None) -> list[Course]:
        with self.lock:
            courses = list(self._courses)
        if search:
            courses = [course for course in courses if course.matches(search)]
        return courses

    def get_by_id(self, course_id: int) -> Course:
        with self.lock:
            course = self._find(course_id)
        if course is None:
            raise NotFound(COURSE_NOT_FOUND)
        return course

    def exists(self, course_id: int) -> bool:
        with self.lock:
            return self._find(course_id) is not None

    def create(self, payload: Any) -> Course:
        fields = validate_course_payload(payload)
        with self.lock:
            return self._insert(fields)

    def update(self, course_id: int, payload: Any) -> Course:
        with self.lock:
            course = self._find(course_id)
            if course is None:
                raise NotFound(COURSE_NOT_FOUND)

            fields = validate_course_payload(payload)
            updated = Course(id=course.id, **fields.model_dump())
            self._courses[self._courses.index(course)] = updated
            return updated

    def delete(self, course_id: int) -> None:
        with self.lock:
            before_length = len(self._courses)
            self._courses = [course for course in self._courses if course.id != course_id]
            if len(self._courses) == before_length:
                raise NotFound(COURSE_NOT_FOUND)


class ScheduleIndex:
    """Per-user set of enrolled course ids.

    Deleting a course does not touch existing schedules; ``get_schedule``
    joins against the live catalog and skips ids that no longer exist.
    """

    def __init__(self, courses: CourseRepository) -> None:
        self._courses = courses
        self._enrollments: dict[int, set[int]] = {}
        self.lock = courses.lock

    def course_ids(self, user_id: int) -> set[int]:
        with self.lock:
            return set(self._enrollments.get(user_id, ()))

    def get_schedule(self, user_id: int) -> list[Course]:
        with self.lock:
            enrolled = self.course_ids(user_id)
            return [course for course in self._courses.list_all() if course.id in enrolled]

    def enroll(self, user_id: int, course_id: int) -> None:
        with self.lock:
            if not self._courses.exists(course_id):
                raise NotFound(COURSE_NOT_FOUND)
            self._enrollments.setdefault(user_id, set()).add(course_id)

    def drop(self, user_id: int, course_id: int) -> None:
        with self.lock:
            self._enrollments.get(user_id, set()).discard(course_id)


class CatalogStore:
    def __init__(self, users: UserStore, courses: CourseRepository) -> None:
        self.users = users
        self.courses = courses
        self.schedules = ScheduleIndex(courses)


def build_seed_users(password: str = SEED_PASSWORD) -> list[User]:
    return [
        User(id=user_id, email=email, role=role, hashed_password=generate_password_hash(password))
        for user_id, email, role in SEED_USERS
    ]


def create_store() -> CatalogStore:
    store = CatalogStore(
        users=UserStore(build_seed_users()),
        courses=CourseRepository(seed=SEED_COURSES),
    )
    logger.info("Catalog store seeded with %d courses", len(SEED_COURSES))
    return store
