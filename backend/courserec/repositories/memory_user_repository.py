# repositories/memory_user_repository.py
"""
In-memory user repository implementation for development/testing
"""
from typing import Optional

from .interfaces.user_repository import UserRepositoryInterface
from .memory_dataset import MemoryDataset
from ..models.user import User


class MemoryUserRepository(UserRepositoryInterface):
    """In-memory implementation of user repository"""

    def __init__(self, dataset: MemoryDataset):
        self.dataset = dataset

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        with self.dataset.lock:
            return self.dataset.users.get(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)"""
        email = email.lower()
        with self.dataset.lock:
            for user in self.dataset.users.values():
                if user.email.lower() == email:
                    return user
            return None
