# repositories/interfaces/review_repository.py
"""
Review and favorite repository interface
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Iterable, Dict
from ...models.course import Review, CourseRatingStats, CourseRatingProfile


class ReviewRepositoryInterface(ABC):
    """Abstract interface for review, rating and favorite queries.

    Only ACTIVE reviews are ever returned or aggregated.
    """

    @abstractmethod
    async def get_user_reviews(
        self,
        user_id: str,
        min_coolness: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Review]:
        """ACTIVE reviews written by the user, optionally above a threshold"""
        pass

    @abstractmethod
    async def get_favorite_course_ids(self, user_id: str, limit: int) -> List[str]:
        """Course ids the user bookmarked"""
        pass

    @abstractmethod
    async def get_global_average_coolness(self) -> Optional[float]:
        """Mean coolness over all rated ACTIVE reviews, None when there are none"""
        pass

    @abstractmethod
    async def get_course_rating_stats(
        self, exclude_course_ids: Iterable[str], limit: int
    ) -> List[CourseRatingStats]:
        """Coolness count/mean for courses with at least one rated review"""
        pass

    @abstractmethod
    async def get_course_rating_profiles(
        self, exclude_course_ids: Iterable[str], limit: int
    ) -> List[CourseRatingProfile]:
        """Per-dimension means for courses with at least one ACTIVE review"""
        pass

    @abstractmethod
    async def count_active_reviews(self, course_ids: Iterable[str]) -> Dict[str, int]:
        """ACTIVE review count per course id"""
        pass
