# api/v1/recommendations.py
"""
Recommendation API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from uuid import uuid4
import logging

from ...core.dependencies import (
    get_course_repository,
    get_current_user,
    get_recommendation_service,
)
from ...models.user import User
from ...models.recommendation import RecommendationType
from ...models.requests import RecommendationResponse, RecommendedCourse
from ...models.student import StudentIdInfo
from ...repositories.interfaces import CourseRepositoryInterface
from ...services.recommendation_service import RecommendationService
from ...services.student_id_parser import parse_student_id

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=RecommendationResponse)
async def get_recommendations(
    type: RecommendationType = RecommendationType.ALL,
    limit: int = Query(20, ge=1, le=50),
    use_cache: bool = True,
    current_user: User = Depends(get_current_user),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
    course_repository: CourseRepositoryInterface = Depends(get_course_repository),
):
    """
    Get course recommendations for the current user

    - **type**: all | collaborative | content | trending | personalized
    - **limit**: Maximum number of recommendations to return (1-50)
    - **use_cache**: Whether a cached list may be served
    """
    request_id = str(uuid4())
    try:
        results, cold_start = await recommendation_service.recommend_for_user(
            current_user, recommendation_type=type, limit=limit, use_cache=use_cache
        )

        courses = await course_repository.get_courses_by_ids(
            [r.course_id for r in results]
        )
        course_map = {course.id: course for course in courses}

        recommendations = [
            RecommendedCourse(
                course_id=r.course_id,
                score=r.score,
                reason=r.reason,
                course=course_map[r.course_id],
            )
            for r in results
            if r.course_id in course_map
        ]

        logger.info(
            f"Returned {len(recommendations)} recommendations to user "
            f"{current_user.id} (request {request_id}, cold_start={cold_start})"
        )

        return RecommendationResponse(
            recommendations=recommendations,
            recommendation_type=type,
            cold_start=cold_start,
            request_id=request_id,
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error in get_recommendations: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate recommendations",
        )


@router.get("/student-id/{student_id}", response_model=StudentIdInfo)
async def parse_student_identifier(student_id: str):
    """Decode a student identifier; invalid ids come back with is_valid=false"""
    return parse_student_id(student_id)
