"""
Core configuration management for the course recommender
Supports multiple environments and recommendation tuning knobs
"""

import os
from enum import Enum
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class AppSettings(BaseSettings):
    """Base configuration settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Application
    app_name: str = "CourseRec"
    app_version: str = "1.0.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: str = "INFO"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"

    # Data sources
    redis_url: Optional[str] = None
    dataset_path: Optional[str] = None

    # Caching
    recommendation_cache_ttl_seconds: int = 60 * 60 * 24

    # Recommendation tuning
    max_recommendation_limit: int = 50
    hybrid_strategy_limit: int = 10
    # Approximate top-N: candidates are capped before scoring, not selected exactly
    trending_candidate_pool: int = 100
    personalized_candidate_pool: int = 100
    hybrid_isolate_strategy_failures: bool = False


class DevelopmentSettings(AppSettings):
    """Development environment settings"""

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: str = "DEBUG"


class TestingSettings(AppSettings):
    """Testing environment settings"""

    environment: Environment = Environment.TESTING
    debug: bool = True

    # In-memory cache and built-in sample catalog
    redis_url: Optional[str] = None
    dataset_path: Optional[str] = None

    # Fast testing
    recommendation_cache_ttl_seconds: int = 1


class ProductionSettings(AppSettings):
    """Staging/production settings"""

    environment: Environment = Environment.PRODUCTION
    debug: bool = False
    redis_url: Optional[str] = "redis://localhost:6379"


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get settings based on environment variable
    Cached for performance
    """
    environment = Environment(os.getenv("ENVIRONMENT", "development"))

    if environment == Environment.TESTING:
        return TestingSettings()
    elif environment in [Environment.STAGING, Environment.PRODUCTION]:
        return ProductionSettings(environment=environment)
    else:
        return DevelopmentSettings()


def validate_configuration(settings: Optional[AppSettings] = None):
    """Validate that the configuration is usable"""
    settings = settings or get_settings()
    errors = []

    if settings.redis_url and not settings.redis_url.startswith(
        ("redis://", "rediss://")
    ):
        errors.append("REDIS_URL must use the redis:// or rediss:// scheme")

    if settings.dataset_path and not os.path.isdir(settings.dataset_path):
        errors.append(f"DATASET_PATH {settings.dataset_path} is not a directory")

    if settings.recommendation_cache_ttl_seconds < 1:
        errors.append("RECOMMENDATION_CACHE_TTL_SECONDS must be positive")

    for field in (
        "max_recommendation_limit",
        "hybrid_strategy_limit",
        "trending_candidate_pool",
        "personalized_candidate_pool",
    ):
        if getattr(settings, field) < 1:
            errors.append(f"{field.upper()} must be at least 1")

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return True
