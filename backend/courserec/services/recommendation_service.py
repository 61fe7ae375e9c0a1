# services/recommendation_service.py
"""
Core recommendation service - orchestrates strategies, cold start and caching
"""
import time
from datetime import timedelta
from typing import List, Tuple
from uuid import uuid4
import logging

from .interfaces.cache_service import CacheServiceInterface
from .collaborative_service import CollaborativeFilterService
from .content_service import ContentBasedService
from .trending_service import TrendingService
from .personalized_service import PersonalizedService
from .hybrid_service import HybridRecommendationService
from .cold_start_service import ColdStartService
from ..repositories.interfaces.interaction_repository import (
    InteractionRepositoryInterface,
)
from ..core.config import AppSettings
from ..models.user import User
from ..models.recommendation import RecommendationResult, RecommendationType

logger = logging.getLogger(__name__)


def recommendation_cache_key(
    user_id: str, recommendation_type: RecommendationType, limit: int
) -> str:
    return f"user:{user_id}:recommendations:{recommendation_type.value}:{limit}"


class RecommendationService:
    """Caller-facing entry point for every recommendation operation"""

    def __init__(
        self,
        collaborative: CollaborativeFilterService,
        content: ContentBasedService,
        trending: TrendingService,
        personalized: PersonalizedService,
        hybrid: HybridRecommendationService,
        cold_start: ColdStartService,
        interaction_repository: InteractionRepositoryInterface,
        cache_service: CacheServiceInterface,
        settings: AppSettings,
    ):
        self.collaborative = collaborative
        self.content = content
        self.trending = trending
        self.personalized = personalized
        self.hybrid = hybrid
        self.cold_start = cold_start
        self.interaction_repository = interaction_repository
        self.cache_service = cache_service
        self.settings = settings

    async def get_collaborative_recommendations(
        self, user_id: str, limit: int = 10
    ) -> List[RecommendationResult]:
        return await self.collaborative.recommend(user_id, limit)

    async def get_content_based_recommendations(
        self, user_id: str, limit: int = 10
    ) -> List[RecommendationResult]:
        return await self.content.recommend(user_id, limit)

    async def get_trending_recommendations(
        self, user_id: str, limit: int = 10
    ) -> List[RecommendationResult]:
        return await self.trending.recommend(user_id, limit)

    async def get_personalized_recommendations(
        self, user_id: str, limit: int = 10
    ) -> List[RecommendationResult]:
        return await self.personalized.recommend(user_id, limit)

    async def get_hybrid_recommendations(
        self, user_id: str, limit: int = 20
    ) -> List[RecommendationResult]:
        return await self.hybrid.recommend(user_id, limit)

    async def get_cold_start_recommendations(
        self, email: str, limit: int = 20
    ) -> List[RecommendationResult]:
        return await self.cold_start.recommend(email, limit)

    def clamp_limit(self, limit: int) -> int:
        return max(1, min(limit, self.settings.max_recommendation_limit))

    async def _compute(
        self, user: User, recommendation_type: RecommendationType, limit: int
    ) -> Tuple[List[RecommendationResult], bool]:
        interaction_count = await self.interaction_repository.count_user_interactions(
            user.id
        )
        if interaction_count == 0:
            return await self.get_cold_start_recommendations(user.email, limit), True

        dispatch = {
            RecommendationType.COLLABORATIVE: self.get_collaborative_recommendations,
            RecommendationType.CONTENT: self.get_content_based_recommendations,
            RecommendationType.TRENDING: self.get_trending_recommendations,
            RecommendationType.PERSONALIZED: self.get_personalized_recommendations,
            RecommendationType.ALL: self.get_hybrid_recommendations,
        }
        return await dispatch[recommendation_type](user.id, limit), False

    async def recommend_for_user(
        self,
        user: User,
        recommendation_type: RecommendationType = RecommendationType.ALL,
        limit: int = 20,
        use_cache: bool = True,
    ) -> Tuple[List[RecommendationResult], bool]:
        """Recommendations for a user, falling back to cold start when the
        user has no interactions. Returns (results, cold_start)."""
        start_time = time.time()
        request_id = str(uuid4())
        limit = self.clamp_limit(limit)

        logger.info(
            f"Starting recommendation request {request_id} for user {user.id} "
            f"(type={recommendation_type.value}, limit={limit})"
        )

        async def compute() -> dict:
            results, cold_start = await self._compute(user, recommendation_type, limit)
            return {
                "cold_start": cold_start,
                "results": [r.model_dump(mode="json") for r in results],
            }

        if use_cache:
            payload = await self.cache_service.get_or_compute(
                recommendation_cache_key(user.id, recommendation_type, limit),
                timedelta(seconds=self.settings.recommendation_cache_ttl_seconds),
                compute,
            )
        else:
            payload = await compute()

        results = [RecommendationResult(**item) for item in payload["results"]]

        total_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Completed recommendation request {request_id} with {len(results)} "
            f"results in {total_time_ms}ms"
        )
        return results, payload["cold_start"]
