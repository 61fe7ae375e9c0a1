# repositories/interfaces/course_repository.py
"""
Course repository interface
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Iterable
from ...models.course import Course


class CourseRepositoryInterface(ABC):
    """Abstract interface for read-only course catalog queries"""

    @abstractmethod
    async def get_courses_by_ids(self, course_ids: Iterable[str]) -> List[Course]:
        """Get courses (department, instructors, tags) for the given ids"""
        pass

    @abstractmethod
    async def find_related_courses(
        self,
        exclude_course_ids: Iterable[str],
        departments: Iterable[str],
        instructor_ids: Iterable[str],
        tag_ids: Iterable[str],
        limit: int,
    ) -> List[Course]:
        """Courses outside the excluded set sharing a department, an
        instructor or a tag with the given sets, capped at ``limit``"""
        pass

    @abstractmethod
    async def get_latest_courses(
        self,
        limit: int,
        departments: Optional[Iterable[str]] = None,
        exclude_course_ids: Optional[Iterable[str]] = None,
    ) -> List[Course]:
        """Most recent courses ordered by year desc then term desc"""
        pass
