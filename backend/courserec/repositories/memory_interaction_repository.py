# repositories/memory_interaction_repository.py
"""
In-memory interaction repository implementation for development/testing
"""
from typing import Optional, List, Iterable, Tuple, Dict, Set

from .interfaces.interaction_repository import InteractionRepositoryInterface
from .memory_dataset import MemoryDataset
from ..models.course import Interaction


class MemoryInteractionRepository(InteractionRepositoryInterface):
    """In-memory implementation of interaction repository"""

    def __init__(self, dataset: MemoryDataset):
        self.dataset = dataset

    def _newest_first(self) -> List[Interaction]:
        with self.dataset.lock:
            events = list(self.dataset.interactions)
        events.sort(key=lambda i: i.created_at, reverse=True)
        return events

    async def get_recent_course_ids(
        self, user_id: str, limit: Optional[int] = None
    ) -> List[str]:
        """Distinct course ids, most recent interaction first"""
        course_ids: List[str] = []
        seen: Set[str] = set()
        for event in self._newest_first():
            if limit is not None and len(course_ids) >= limit:
                break
            if event.user_id != user_id or event.course_id in seen:
                continue
            seen.add(event.course_id)
            course_ids.append(event.course_id)
        return course_ids

    async def get_neighbor_user_ids(
        self, course_ids: Iterable[str], exclude_user_id: str, limit: int
    ) -> List[str]:
        """Distinct other users who touched any of the courses"""
        wanted = set(course_ids)
        user_ids: List[str] = []
        seen: Set[str] = set()
        for event in self._newest_first():
            if len(user_ids) >= limit:
                break
            if (
                event.course_id not in wanted
                or event.user_id == exclude_user_id
                or event.user_id in seen
            ):
                continue
            seen.add(event.user_id)
            user_ids.append(event.user_id)
        return user_ids

    async def count_neighbor_interactions(
        self, user_ids: Iterable[str], exclude_course_ids: Iterable[str], limit: int
    ) -> List[Tuple[str, int]]:
        """Distinct neighbor count per course, highest first"""
        neighbors = set(user_ids)
        excluded = set(exclude_course_ids)
        users_by_course: Dict[str, Set[str]] = {}
        for event in self._newest_first():
            if event.user_id in neighbors and event.course_id not in excluded:
                users_by_course.setdefault(event.course_id, set()).add(event.user_id)

        counts = [(course_id, len(users)) for course_id, users in users_by_course.items()]
        counts.sort(key=lambda item: item[1], reverse=True)
        return counts[:limit]

    async def count_user_interactions(self, user_id: str) -> int:
        with self.dataset.lock:
            return sum(1 for i in self.dataset.interactions if i.user_id == user_id)
