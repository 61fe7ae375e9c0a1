# services/trending_service.py
"""
Trending courses ranked by a Bayesian-smoothed coolness rating
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

MIN_VOTES = 5  # m: votes needed before a course's own mean dominates
DEFAULT_GLOBAL_MEAN = 3.0
MAX_RATING = 5.0


def bayesian_score(
    rated_count: int, average: float, global_mean: float, min_votes: int = MIN_VOTES
) -> float:
    """(v / (v + m)) * R + (m / (v + m)) * C, normalized to [0, 1]"""
    total = rated_count + min_votes
    weighted = (rated_count / total) * average + (min_votes / total) * global_mean
    return weighted / MAX_RATING


class TrendingService(RecommendationStrategyInterface):
    """Popular, well-rated courses the user has not touched yet.

    Only the first ``candidate_pool`` eligible courses are scored, so the
    result approximates the true top-N when more courses qualify.
    """

    reason = RecommendationReason.TRENDING

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
        """An empty user_id excludes nothing"""
        try:
            exclude_ids = []
            if user_id:
                exclude_ids = await self.interaction_repository.get_recent_course_ids(
                    user_id
                )

            global_mean = await self.review_repository.get_global_average_coolness()
            if global_mean is None:
                global_mean = DEFAULT_GLOBAL_MEAN

            stats = await self.review_repository.get_course_rating_stats(
                exclude_course_ids=exclude_ids, limit=self.candidate_pool
            )
        except Exception as e:
            logger.error(f"Trending recommendations error for user {user_id}: {e}")
            return []

        scored = [
            RecommendationResult(
                course_id=s.course_id,
                score=bayesian_score(s.rated_count, s.average, global_mean),
                reason=self.reason,
            )
            for s in stats
        ]
        scored.sort(key=lambda r: r.score, reverse=True)
        return scored[:limit]
