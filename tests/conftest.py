import sys
from datetime import datetime, timedelta
from pathlib import Path
from types import SimpleNamespace

import pytest

# Ensure the package under test is importable without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
BACKEND_PATH = PROJECT_ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

from courserec.core.config import TestingSettings  # noqa: E402
from courserec.models.course import Course, Interaction  # noqa: E402
from courserec.repositories.memory_course_repository import MemoryCourseRepository  # noqa: E402
from courserec.repositories.memory_interaction_repository import (  # noqa: E402
    MemoryInteractionRepository,
)
from courserec.repositories.memory_review_repository import MemoryReviewRepository  # noqa: E402
from courserec.repositories.memory_user_repository import MemoryUserRepository  # noqa: E402

BASE_TIME = datetime(2024, 9, 1, 12, 0, 0)


@pytest.fixture
def settings():
    return TestingSettings()


@pytest.fixture
def make_course():
    """Factory for catalog courses with sensible defaults."""

    def _make(course_id, department=None, year=113, term=1, instructor_ids=(), tag_ids=()):
        return Course(
            id=course_id,
            course_code=course_id.upper(),
            course_name=f"Course {course_id}",
            department=department,
            year=year,
            term=term,
            instructor_ids=list(instructor_ids),
            tag_ids=list(tag_ids),
        )

    return _make


@pytest.fixture
def make_interactions():
    """Interactions for one user, each later than the previous one."""
    counter = {"n": 0}

    def _make(user_id, course_ids):
        events = []
        for course_id in course_ids:
            counter["n"] += 1
            events.append(
                Interaction(
                    user_id=user_id,
                    course_id=course_id,
                    created_at=BASE_TIME + timedelta(minutes=counter["n"]),
                )
            )
        return events

    return _make


@pytest.fixture
def build_repositories():
    """Wrap a MemoryDataset in the four memory repositories."""

    def _build(dataset):
        return SimpleNamespace(
            courses=MemoryCourseRepository(dataset),
            interactions=MemoryInteractionRepository(dataset),
            reviews=MemoryReviewRepository(dataset),
            users=MemoryUserRepository(dataset),
        )

    return _build
