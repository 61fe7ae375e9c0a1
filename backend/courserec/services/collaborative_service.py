# services/collaborative_service.py
"""
Collaborative filtering: "people who took A also looked at B"
"""
from typing import List
import logging

from .interfaces.strategy_service import RecommendationStrategyInterface
from ..repositories.interfaces.interaction_repository import (
    InteractionRepositoryInterface,
)
from ..models.recommendation import RecommendationReason, RecommendationResult

logger = logging.getLogger(__name__)

RECENT_COURSES_LIMIT = 50
NEIGHBOR_LIMIT = 50
RANK_DECAY = 0.05


class CollaborativeFilterService(RecommendationStrategyInterface):
    """Neighbor-based co-interaction counting"""

    reason = RecommendationReason.COLLABORATIVE

    def __init__(self, interaction_repository: InteractionRepositoryInterface):
        self.interaction_repository = interaction_repository

    async def recommend(
        self, user_id: str, limit: int = 10
    ) -> List[RecommendationResult]:
        try:
            user_course_ids = await self.interaction_repository.get_recent_course_ids(
                user_id, limit=RECENT_COURSES_LIMIT
            )
            if not user_course_ids:
                return []

            neighbor_ids = await self.interaction_repository.get_neighbor_user_ids(
                user_course_ids, exclude_user_id=user_id, limit=NEIGHBOR_LIMIT
            )
            if not neighbor_ids:
                return []

            counts = await self.interaction_repository.count_neighbor_interactions(
                neighbor_ids, exclude_course_ids=user_course_ids, limit=limit
            )
        except Exception as e:
            logger.error(f"Collaborative filtering error for user {user_id}: {e}")
            return []

        # Linear rank decay, no floor: ranks past 20 go negative
        return [
            RecommendationResult(
                course_id=course_id,
                score=1.0 - index * RANK_DECAY,
                reason=self.reason,
            )
            for index, (course_id, _) in enumerate(counts)
        ]
