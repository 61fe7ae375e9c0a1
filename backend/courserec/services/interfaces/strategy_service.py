# services/interfaces/strategy_service.py
"""
Recommendation strategy interface
"""
from abc import ABC, abstractmethod
from typing import List
from ...models.recommendation import RecommendationReason, RecommendationResult


class RecommendationStrategyInterface(ABC):
    """A single signal source producing scored course ids for a user"""

    reason: RecommendationReason

    @abstractmethod
    async def recommend(
        self, user_id: str, limit: int = 10
    ) -> List[RecommendationResult]:
        """Scored recommendations, best first. Data access failures are
        logged and yield an empty list."""
        pass
