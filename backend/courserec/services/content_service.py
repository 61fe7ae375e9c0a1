# services/content_service.py
"""
Content-based filtering over department, instructor and tag overlap
"""
from typing import List
import logging

from .interfaces.strategy_service import RecommendationStrategyInterface
from ..repositories.interfaces.course_repository import CourseRepositoryInterface
from ..repositories.interfaces.review_repository import ReviewRepositoryInterface
from ..models.course import Course
from ..models.recommendation import RecommendationReason, RecommendationResult

logger = logging.getLogger(__name__)

LIKED_REVIEW_MIN_COOLNESS = 4
LIKED_SOURCE_LIMIT = 20

DEPARTMENT_WEIGHT = 0.3
INSTRUCTOR_WEIGHT = 0.4
TAG_WEIGHT = 0.2
TAG_WEIGHT_CAP = 0.6


def score_course(
    course: Course, departments: set, instructor_ids: set, tag_ids: set
) -> float:
    """Similarity of a candidate to the liked profile, in [0, 1.3]"""
    score = 0.0
    if course.department and course.department in departments:
        score += DEPARTMENT_WEIGHT
    if instructor_ids.intersection(course.instructor_ids):
        score += INSTRUCTOR_WEIGHT
    shared_tags = len(tag_ids.intersection(course.tag_ids))
    score += min(shared_tags * TAG_WEIGHT, TAG_WEIGHT_CAP)
    return score


class ContentBasedService(RecommendationStrategyInterface):
    """Recommend courses similar to the ones a user liked"""

    reason = RecommendationReason.CONTENT

    def __init__(
        self,
        course_repository: CourseRepositoryInterface,
        review_repository: ReviewRepositoryInterface,
    ):
        self.course_repository = course_repository
        self.review_repository = review_repository

    async def _liked_course_ids(self, user_id: str) -> List[str]:
        reviews = await self.review_repository.get_user_reviews(
            user_id,
            min_coolness=LIKED_REVIEW_MIN_COOLNESS,
            limit=LIKED_SOURCE_LIMIT,
        )
        favorites = await self.review_repository.get_favorite_course_ids(
            user_id, limit=LIKED_SOURCE_LIMIT
        )
        return list(dict.fromkeys([r.course_id for r in reviews] + favorites))

    async def recommend(
        self, user_id: str, limit: int = 10
    ) -> List[RecommendationResult]:
        try:
            liked_ids = await self._liked_course_ids(user_id)
            if not liked_ids:
                return []

            liked_courses = await self.course_repository.get_courses_by_ids(liked_ids)
            departments = {c.department for c in liked_courses if c.department}
            instructor_ids = {i for c in liked_courses for i in c.instructor_ids}
            tag_ids = {t for c in liked_courses for t in c.tag_ids}

            candidates = await self.course_repository.find_related_courses(
                exclude_course_ids=liked_ids,
                departments=departments,
                instructor_ids=instructor_ids,
                tag_ids=tag_ids,
                limit=limit * 2,
            )
        except Exception as e:
            logger.error(f"Content-based filtering error for user {user_id}: {e}")
            return []

        scored = [
            RecommendationResult(
                course_id=course.id,
                score=score_course(course, departments, instructor_ids, tag_ids),
                reason=self.reason,
            )
            for course in candidates
        ]
        scored = [r for r in scored if r.score > 0]
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:limit]
