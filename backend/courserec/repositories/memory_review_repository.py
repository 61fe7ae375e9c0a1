# repositories/memory_review_repository.py
"""
In-memory review repository implementation for development/testing
"""
from typing import Optional, List, Iterable, Dict

from .interfaces.review_repository import ReviewRepositoryInterface
from .memory_dataset import MemoryDataset
from ..models.course import Review, CourseRatingStats, CourseRatingProfile


def _mean(values: List[Optional[int]]) -> float:
    # Unrated dimensions count as zero
    return sum(value or 0 for value in values) / len(values)


class MemoryReviewRepository(ReviewRepositoryInterface):
    """In-memory implementation of review repository"""

    def __init__(self, dataset: MemoryDataset):
        self.dataset = dataset

    def _active_reviews_by_course(
        self, exclude_course_ids: Iterable[str]
    ) -> Dict[str, List[Review]]:
        """Group ACTIVE reviews by course, in catalog order"""
        excluded = set(exclude_course_ids)
        with self.dataset.lock:
            grouped: Dict[str, List[Review]] = {
                course_id: []
                for course_id in self.dataset.courses
                if course_id not in excluded
            }
            for review in self.dataset.active_reviews():
                if review.course_id in grouped:
                    grouped[review.course_id].append(review)
        return grouped

    async def get_user_reviews(
        self,
        user_id: str,
        min_coolness: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Review]:
        with self.dataset.lock:
            reviews = [
                review
                for review in self.dataset.active_reviews()
                if review.user_id == user_id
                and (
                    min_coolness is None
                    or (review.coolness is not None and review.coolness >= min_coolness)
                )
            ]
        return reviews if limit is None else reviews[:limit]

    async def get_favorite_course_ids(self, user_id: str, limit: int) -> List[str]:
        with self.dataset.lock:
            course_ids = [f.course_id for f in self.dataset.favorites if f.user_id == user_id]
        return course_ids[:limit]

    async def get_global_average_coolness(self) -> Optional[float]:
        with self.dataset.lock:
            ratings = [
                r.coolness for r in self.dataset.active_reviews() if r.coolness is not None
            ]
        if not ratings:
            return None
        return sum(ratings) / len(ratings)

    async def get_course_rating_stats(
        self, exclude_course_ids: Iterable[str], limit: int
    ) -> List[CourseRatingStats]:
        stats = []
        for course_id, reviews in self._active_reviews_by_course(
            exclude_course_ids
        ).items():
            if len(stats) >= limit:
                break
            ratings = [r.coolness for r in reviews if r.coolness is not None]
            if not ratings:
                continue
            stats.append(
                CourseRatingStats(
                    course_id=course_id,
                    rated_count=len(ratings),
                    average=sum(ratings) / len(ratings),
                )
            )
        return stats

    async def get_course_rating_profiles(
        self, exclude_course_ids: Iterable[str], limit: int
    ) -> List[CourseRatingProfile]:
        profiles = []
        for course_id, reviews in self._active_reviews_by_course(
            exclude_course_ids
        ).items():
            if len(profiles) >= limit:
                break
            if not reviews:
                continue
            profiles.append(
                CourseRatingProfile(
                    course_id=course_id,
                    review_count=len(reviews),
                    coolness=_mean([r.coolness for r in reviews]),
                    usefulness=_mean([r.usefulness for r in reviews]),
                    grading=_mean([r.grading for r in reviews]),
                )
            )
        return profiles

    async def count_active_reviews(self, course_ids: Iterable[str]) -> Dict[str, int]:
        counts = {course_id: 0 for course_id in course_ids}
        with self.dataset.lock:
            for review in self.dataset.active_reviews():
                if review.course_id in counts:
                    counts[review.course_id] += 1
        return counts
