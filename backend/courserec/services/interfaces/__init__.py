# services/interfaces/__init__.py
"""
Service interfaces package
"""
from .cache_service import CacheServiceInterface
from .strategy_service import RecommendationStrategyInterface

__all__ = [
    "CacheServiceInterface",
    "RecommendationStrategyInterface",
]
