"""
API request and response models
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any
from datetime import datetime

from .course import Course
from .recommendation import RecommendationReason, RecommendationType


class RecommendedCourse(BaseModel):
    """A recommendation joined with the course it points at"""

    course_id: str
    score: float
    reason: RecommendationReason
    course: Course


class RecommendationResponse(BaseModel):
    """Response with course recommendations"""

    recommendations: List[RecommendedCourse]
    recommendation_type: RecommendationType
    cold_start: bool = False
    request_id: str
    generated_at: datetime = Field(default_factory=datetime.utcnow)


class HealthCheckResponse(BaseModel):
    """Health check response"""

    status: str = "healthy"
    version: str
    environment: str
    services: Dict[str, str]  # service_name -> status
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Standard error response"""

    error: str
    message: str
    code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
