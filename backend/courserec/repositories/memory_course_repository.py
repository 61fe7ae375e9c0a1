# repositories/memory_course_repository.py
"""
In-memory course repository implementation for development/testing
"""
from typing import Optional, List, Iterable

from .interfaces.course_repository import CourseRepositoryInterface
from .memory_dataset import MemoryDataset
from ..models.course import Course


class MemoryCourseRepository(CourseRepositoryInterface):
    """In-memory implementation of course repository"""

    def __init__(self, dataset: MemoryDataset):
        self.dataset = dataset

    async def get_courses_by_ids(self, course_ids: Iterable[str]) -> List[Course]:
        """Get courses for the given ids, unknown ids are skipped"""
        with self.dataset.lock:
            return [
                self.dataset.courses[course_id]
                for course_id in dict.fromkeys(course_ids)
                if course_id in self.dataset.courses
            ]

    async def find_related_courses(
        self,
        exclude_course_ids: Iterable[str],
        departments: Iterable[str],
        instructor_ids: Iterable[str],
        tag_ids: Iterable[str],
        limit: int,
    ) -> List[Course]:
        """Courses sharing a department, instructor or tag"""
        excluded = set(exclude_course_ids)
        departments = set(departments)
        instructor_ids = set(instructor_ids)
        tag_ids = set(tag_ids)

        with self.dataset.lock:
            related = []
            for course in self.dataset.courses.values():
                if len(related) >= limit:
                    break
                if course.id in excluded:
                    continue
                if (
                    (course.department and course.department in departments)
                    or instructor_ids.intersection(course.instructor_ids)
                    or tag_ids.intersection(course.tag_ids)
                ):
                    related.append(course)
            return related

    async def get_latest_courses(
        self,
        limit: int,
        departments: Optional[Iterable[str]] = None,
        exclude_course_ids: Optional[Iterable[str]] = None,
    ) -> List[Course]:
        """Most recent courses ordered by year desc then term desc"""
        excluded = set(exclude_course_ids or [])
        wanted = set(departments) if departments is not None else None

        with self.dataset.lock:
            courses = [
                course
                for course in self.dataset.courses.values()
                if course.id not in excluded
                and (wanted is None or course.department in wanted)
            ]

        courses.sort(key=lambda c: (c.year, c.term), reverse=True)
        return courses[: max(limit, 0)]
