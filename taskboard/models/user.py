from sqlmodel import SQLModel, Field, Column, JSON
from sqlalchemy import DateTime
from datetime import datetime
from typing import List
from uuid import uuid4

from ..timeutils import utcnow


class User(SQLModel, table=True):
    """User model for authentication and the shared-board list.

    ``board`` keeps the emails a user has subscribed to, in insertion order.
    """
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    hashed_password: str
    board: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
