"""
User-related data models
"""
from pydantic import BaseModel
from typing import Optional


class User(BaseModel):
    """Core user model, as supplied by the identity layer"""

    id: str
    email: str
    name: Optional[str] = None

    class Config:
        from_attributes = True
