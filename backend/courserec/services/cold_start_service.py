# services/cold_start_service.py
"""
Cold-start recommendations for users without interaction history
"""
from typing import List, Optional, Set
import logging

from .student_id_parser import (
    parse_student_id_from_email,
    get_department_category,
    get_related_departments,
    get_department_name,
)
from .trending_service import TrendingService
from ..repositories.interfaces.course_repository import CourseRepositoryInterface
from ..repositories.interfaces.review_repository import ReviewRepositoryInterface
from ..models.course import Course
from ..models.recommendation import RecommendationReason, RecommendationResult

logger = logging.getLogger(__name__)

DEPARTMENT_SHARE = 0.5
RELATED_SHARE = 0.3

DEPARTMENT_BASE_SCORE = 0.9
RELATED_BASE_SCORE = 0.7
DEPARTMENT_RANK_DECAY = 0.015
YEAR_BASELINE = 100
YEAR_SPAN = 20
YEAR_WEIGHT = 0.1
REVIEW_BONUS_STEP = 0.05
REVIEW_BONUS_CAP = 0.2

TRENDING_SCALE = 0.6

NEWEST_BASE_SCORE = 0.5
NEWEST_RANK_DECAY = 0.01


class ColdStartService:
    """Build a ranked list from the student's department, related departments,
    trending courses and finally the newest courses, in that order.

    Each course is emitted once, with the score of the first stage to place it.
    """

    def __init__(
        self,
        course_repository: CourseRepositoryInterface,
        review_repository: ReviewRepositoryInterface,
        trending: TrendingService,
    ):
        self.course_repository = course_repository
        self.review_repository = review_repository
        self.trending = trending

    async def _score_department_courses(
        self, courses: List[Course], base: float, seen: Set[str]
    ) -> List[RecommendationResult]:
        review_counts = await self.review_repository.count_active_reviews(
            [c.id for c in courses]
        )
        results = []
        for index, course in enumerate(courses):
            if course.id in seen:
                continue
            year_score = (course.year - YEAR_BASELINE) / YEAR_SPAN
            review_bonus = min(
                review_counts.get(course.id, 0) * REVIEW_BONUS_STEP, REVIEW_BONUS_CAP
            )
            seen.add(course.id)
            results.append(
                RecommendationResult(
                    course_id=course.id,
                    score=base
                    - index * DEPARTMENT_RANK_DECAY
                    + year_score * YEAR_WEIGHT
                    + review_bonus,
                    reason=RecommendationReason.CONTENT,
                )
            )
        return results

    async def _department_stage(
        self, department: str, limit: int, seen: Set[str]
    ) -> List[RecommendationResult]:
        quota = int(limit * DEPARTMENT_SHARE)
        if quota <= 0:
            return []
        courses = await self.course_repository.get_latest_courses(
            limit=quota, departments=[department], exclude_course_ids=seen
        )
        return await self._score_department_courses(courses, DEPARTMENT_BASE_SCORE, seen)

    async def _related_stage(
        self, department_code: str, limit: int, seen: Set[str]
    ) -> List[RecommendationResult]:
        quota = int(limit * RELATED_SHARE)
        related_names = [
            name
            for name in map(get_department_name, get_related_departments(department_code))
            if name
        ]
        if quota <= 0 or not related_names:
            return []
        courses = await self.course_repository.get_latest_courses(
            limit=quota, departments=related_names, exclude_course_ids=seen
        )
        return await self._score_department_courses(courses, RELATED_BASE_SCORE, seen)

    async def _trending_stage(
        self, remaining: int, seen: Set[str]
    ) -> List[RecommendationResult]:
        # Ask for extra so already-seen courses do not eat into the remaining slots
        trending = await self.trending.recommend("", remaining + len(seen))
        results = []
        for rec in trending:
            if len(results) >= remaining:
                break
            if rec.course_id in seen:
                continue
            seen.add(rec.course_id)
            results.append(
                RecommendationResult(
                    course_id=rec.course_id,
                    score=rec.score * TRENDING_SCALE,
                    reason=rec.reason,
                )
            )
        return results

    async def _newest_stage(
        self, remaining: int, seen: Set[str]
    ) -> List[RecommendationResult]:
        courses = await self.course_repository.get_latest_courses(
            limit=remaining, exclude_course_ids=seen
        )
        results = []
        for index, course in enumerate(courses):
            if course.id in seen:
                continue
            seen.add(course.id)
            results.append(
                RecommendationResult(
                    course_id=course.id,
                    score=NEWEST_BASE_SCORE - index * NEWEST_RANK_DECAY,
                    reason=RecommendationReason.TRENDING,
                )
            )
        return results

    async def recommend(
        self, email: str, limit: int = 20
    ) -> List[RecommendationResult]:
        info = parse_student_id_from_email(email)
        department_code: Optional[str] = None
        department: Optional[str] = None
        if info is not None and info.is_valid:
            department_code = info.department_code
            department = info.department

        results: List[RecommendationResult] = []
        seen: Set[str] = set()

        try:
            if department:
                results += await self._department_stage(department, limit, seen)

            if (
                department_code
                and get_department_category(department_code)
                and len(results) < limit
            ):
                results += await self._related_stage(department_code, limit, seen)

            if len(results) < limit:
                results += await self._trending_stage(limit - len(results), seen)

            if len(results) < limit:
                results += await self._newest_stage(limit - len(results), seen)
        except Exception as e:
            logger.error(f"Cold start recommendations error for {email}: {e}")
            return []

        logger.debug(
            f"Cold start for department {department or 'unknown'} "
            f"produced {len(results)} recommendations"
        )
        results.sort(key=lambda r: r.score, reverse=True)
        return results[:limit]
