# repositories/interfaces/interaction_repository.py
"""
Interaction repository interface
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Iterable, Tuple


class InteractionRepositoryInterface(ABC):
    """Abstract interface for interaction event queries"""

    @abstractmethod
    async def get_recent_course_ids(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[str]:
        """Distinct course ids the user interacted with, most recent first"""
        pass

    @abstractmethod
    async def get_neighbor_user_ids(
        self, course_ids: Iterable[str], exclude_user_id: str, limit: int
    ) -> List[str]:
        """Distinct other users who interacted with any of the courses"""
        pass

    @abstractmethod
    async def count_neighbor_interactions(
        self, user_ids: Iterable[str], exclude_course_ids: Iterable[str], limit: int
    ) -> List[Tuple[str, int]]:
        """(course_id, distinct user count) outside the excluded set,
        ordered by count descending"""
        pass

    @abstractmethod
    async def count_user_interactions(self, user_id: str) -> int:
        """Total interaction events recorded for a user"""
        pass
