"""
Recommendation result models
"""
from pydantic import BaseModel
from enum import Enum


class RecommendationReason(str, Enum):
    """Which strategy produced (or last replaced) a recommendation's score"""

    COLLABORATIVE = "COLLABORATIVE"
    CONTENT = "CONTENT"
    TRENDING = "TRENDING"
    PERSONALIZED = "PERSONALIZED"


class RecommendationType(str, Enum):
    """Strategy selector exposed to callers"""

    ALL = "all"
    COLLABORATIVE = "collaborative"
    CONTENT = "content"
    TRENDING = "trending"
    PERSONALIZED = "personalized"


class RecommendationResult(BaseModel):
    course_id: str
    score: float
    reason: RecommendationReason
