# repositories/interfaces/user_repository.py
"""
User repository interface
"""
from abc import ABC, abstractmethod
from typing import Optional
from ...models.user import User


class UserRepositoryInterface(ABC):
    """Abstract interface for user lookups"""

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        pass
