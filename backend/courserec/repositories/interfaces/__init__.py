# repositories/interfaces/__init__.py
"""
Repository interfaces package
"""
from .user_repository import UserRepositoryInterface
from .course_repository import CourseRepositoryInterface
from .interaction_repository import InteractionRepositoryInterface
from .review_repository import ReviewRepositoryInterface

__all__ = [
    "UserRepositoryInterface",
    "CourseRepositoryInterface",
    "InteractionRepositoryInterface",
    "ReviewRepositoryInterface",
]
