"""
Dependency injection setup for the course recommender
Manages service lifecycle and provides clean dependency injection
"""

from functools import lru_cache
from typing import Optional
from fastapi import Depends, Header, HTTPException, status
import redis.asyncio as redis
import logging

from .config import get_settings, AppSettings
from ..models.user import User
from ..services.interfaces import CacheServiceInterface
from ..services.cache_service import RedisCacheService
from ..services.memory_cache_service import MemoryCacheService
from ..services.collaborative_service import CollaborativeFilterService
from ..services.content_service import ContentBasedService
from ..services.trending_service import TrendingService
from ..services.personalized_service import PersonalizedService
from ..services.hybrid_service import HybridRecommendationService
from ..services.cold_start_service import ColdStartService
from ..services.recommendation_service import RecommendationService

from ..repositories.interfaces import (
    UserRepositoryInterface,
    CourseRepositoryInterface,
    InteractionRepositoryInterface,
    ReviewRepositoryInterface,
)
from ..repositories.memory_dataset import MemoryDataset
from ..repositories.memory_user_repository import MemoryUserRepository
from ..repositories.memory_course_repository import MemoryCourseRepository
from ..repositories.memory_interaction_repository import MemoryInteractionRepository
from ..repositories.memory_review_repository import MemoryReviewRepository

logger = logging.getLogger(__name__)


# Database Dependencies
@lru_cache()
def get_redis_pool():
    """Get Redis connection pool"""
    settings = get_settings()
    if settings.redis_url:
        return redis.from_url(settings.redis_url)
    # Memory-based cache for development/testing
    return None


@lru_cache()
def get_dataset() -> MemoryDataset:
    """Load the data snapshot backing the repositories"""
    settings = get_settings()
    if settings.dataset_path:
        return MemoryDataset.from_directory(settings.dataset_path)
    logger.info("No dataset path configured, using the built-in sample catalog")
    return MemoryDataset.sample()


# Repository Dependencies
@lru_cache()
def get_user_repository() -> UserRepositoryInterface:
    return MemoryUserRepository(get_dataset())


@lru_cache()
def get_course_repository() -> CourseRepositoryInterface:
    return MemoryCourseRepository(get_dataset())


@lru_cache()
def get_interaction_repository() -> InteractionRepositoryInterface:
    return MemoryInteractionRepository(get_dataset())


@lru_cache()
def get_review_repository() -> ReviewRepositoryInterface:
    return MemoryReviewRepository(get_dataset())


# Service Dependencies
@lru_cache()
def get_cache_service() -> CacheServiceInterface:
    """Get cache service instance"""
    redis_pool = get_redis_pool()
    settings = get_settings()
    if redis_pool is None:
        return MemoryCacheService(settings)
    return RedisCacheService(redis_pool, settings)


@lru_cache()
def get_trending_service() -> TrendingService:
    settings = get_settings()
    return TrendingService(
        get_interaction_repository(),
        get_review_repository(),
        candidate_pool=settings.trending_candidate_pool,
    )


@lru_cache()
def get_recommendation_service() -> RecommendationService:
    """Get the recommendation service with all its dependencies"""
    settings = get_settings()
    interaction_repository = get_interaction_repository()
    review_repository = get_review_repository()
    course_repository = get_course_repository()
    trending = get_trending_service()

    collaborative = CollaborativeFilterService(interaction_repository)
    content = ContentBasedService(course_repository, review_repository)
    personalized = PersonalizedService(
        interaction_repository,
        review_repository,
        candidate_pool=settings.personalized_candidate_pool,
    )
    hybrid = HybridRecommendationService(
        collaborative,
        content,
        trending,
        personalized,
        strategy_limit=settings.hybrid_strategy_limit,
        isolate_failures=settings.hybrid_isolate_strategy_failures,
    )
    cold_start = ColdStartService(course_repository, review_repository, trending)

    return RecommendationService(
        collaborative=collaborative,
        content=content,
        trending=trending,
        personalized=personalized,
        hybrid=hybrid,
        cold_start=cold_start,
        interaction_repository=interaction_repository,
        cache_service=get_cache_service(),
        settings=settings,
    )


# Identity Dependencies
async def get_current_user(
    x_user_id: Optional[str] = Header(None),
    user_repository: UserRepositoryInterface = Depends(get_user_repository),
) -> User:
    """Resolve the user forwarded by the identity layer"""
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    user = await user_repository.get_user_by_id(x_user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )
    return user


# Health Check Dependencies
async def get_service_health() -> dict:
    """Get health status of all services"""
    health_status = {"cache": "unknown", "dataset": "unknown"}

    try:
        if get_redis_pool() is None:
            health_status["cache"] = "memory"
        elif await get_cache_service().ping():
            health_status["cache"] = "healthy"
    except Exception as e:
        health_status["cache"] = f"unhealthy: {str(e)}"

    try:
        dataset = get_dataset()
        health_status["dataset"] = f"healthy ({len(dataset.courses)} courses)"
    except Exception as e:
        health_status["dataset"] = f"unhealthy: {str(e)}"

    return health_status


# Cleanup function for application shutdown
async def cleanup_resources():
    """Cleanup resources on application shutdown"""
    try:
        redis_pool = get_redis_pool()
        if redis_pool:
            await redis_pool.aclose()
    except Exception as e:
        logger.error(f"Error cleaning up Redis: {e}")

    # Clear caches
    get_redis_pool.cache_clear()
    get_dataset.cache_clear()
    get_user_repository.cache_clear()
    get_course_repository.cache_clear()
    get_interaction_repository.cache_clear()
    get_review_repository.cache_clear()
    get_cache_service.cache_clear()
    get_trending_service.cache_clear()
    get_recommendation_service.cache_clear()


# Settings dependency
def get_app_settings() -> AppSettings:
    """Get application settings"""
    return get_settings()
