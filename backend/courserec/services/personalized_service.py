# services/personalized_service.py
"""
Personalized preference matching, used as a booster by the hybrid merge
"""
from typing import List
import logging

from .interfaces.strategy_service import RecommendationStrategyInterface
from ..repositories.interfaces.interaction_repository import (
    InteractionRepositoryInterface,
)
from ..repositories.interfaces.review_repository import ReviewRepositoryInterface
from ..models.recommendation import RecommendationReason, RecommendationResult

logger = logging.getLogger(__name__)

PREFERENCE_THRESHOLD = 4
COOLNESS_WEIGHT = 0.4
USEFULNESS_WEIGHT = 0.3
GRADING_WEIGHT = 0.3


def _mean(values) -> float:
    values = list(values)
    return sum(v or 0 for v in values) / len(values)


class PersonalizedService(RecommendationStrategyInterface):
    """Match courses to the rating dimensions a user tends to score highly"""

    reason = RecommendationReason.PERSONALIZED

    def __init__(
        self,
        interaction_repository: InteractionRepositoryInterface,
        review_repository: ReviewRepositoryInterface,
        candidate_pool: int = 100,
    ):
        self.interaction_repository = interaction_repository
        self.review_repository = review_repository
        self.candidate_pool = candidate_pool

    async def recommend(
        self, user_id: str, limit: int = 10
    ) -> List[RecommendationResult]:
        try:
            reviews = await self.review_repository.get_user_reviews(user_id)
            if not reviews:
                return []

            prefers_cool = _mean(r.coolness for r in reviews) >= PREFERENCE_THRESHOLD
            prefers_useful = (
                _mean(r.usefulness for r in reviews) >= PREFERENCE_THRESHOLD
            )
            prefers_sweet = _mean(r.grading for r in reviews) >= PREFERENCE_THRESHOLD

            exclude_ids = await self.interaction_repository.get_recent_course_ids(
                user_id
            )
            profiles = await self.review_repository.get_course_rating_profiles(
                exclude_course_ids=exclude_ids, limit=self.candidate_pool
            )
        except Exception as e:
            logger.error(f"Personalized recommendations error for user {user_id}: {e}")
            return []

        scored = []
        for profile in profiles:
            score = 0.0
            if prefers_cool and profile.coolness >= PREFERENCE_THRESHOLD:
                score += COOLNESS_WEIGHT
            if prefers_useful and profile.usefulness >= PREFERENCE_THRESHOLD:
                score += USEFULNESS_WEIGHT
            if prefers_sweet and profile.grading >= PREFERENCE_THRESHOLD:
                score += GRADING_WEIGHT
            if score > 0:
                scored.append(
                    RecommendationResult(
                        course_id=profile.course_id, score=score, reason=self.reason
                    )
                )

        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:limit]
