"""
Course-related data models
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class Course(BaseModel):
    """Core course model"""

    id: str
    course_code: str
    course_name: str
    department: Optional[str] = None

    # Offering period, ROC academic year (e.g. 113) and term (1 or 2)
    year: int
    term: int
    credits: Optional[int] = None

    instructor_ids: List[str] = Field(default_factory=list)
    tag_ids: List[str] = Field(default_factory=list)

    class Config:
        from_attributes = True


class ReviewStatus(str, Enum):
    ACTIVE = "ACTIVE"
    HIDDEN = "HIDDEN"
    DELETED = "DELETED"


class Review(BaseModel):
    """A user's review of a course, at most one per user per course"""

    id: str
    user_id: str
    course_id: str
    coolness: Optional[int] = Field(None, ge=1, le=5)
    usefulness: Optional[int] = Field(None, ge=1, le=5)
    grading: Optional[int] = Field(None, ge=1, le=5)
    status: ReviewStatus = ReviewStatus.ACTIVE


class Interaction(BaseModel):
    """Implicit feedback event (view, click, ...)"""

    user_id: str
    course_id: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Favorite(BaseModel):
    user_id: str
    course_id: str


class CourseRatingStats(BaseModel):
    """Coolness aggregate over a course's rated ACTIVE reviews"""

    course_id: str
    rated_count: int
    average: float


class CourseRatingProfile(BaseModel):
    """Per-dimension means over a course's ACTIVE reviews"""

    course_id: str
    review_count: int
    coolness: float
    usefulness: float
    grading: float
