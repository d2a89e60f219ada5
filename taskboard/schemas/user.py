from pydantic import BaseModel, Field
from typing import List, Optional


class RegisterRequest(BaseModel):
    email: str = Field(min_length=1)
    name: str = Field(min_length=1)
    password: str = Field(min_length=1)
    confirm_password: str = Field(min_length=1, alias="confirmPassword")

    class Config:
        populate_by_name = True


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    """Profile change; any subset of fields, passwords only as a pair."""
    name: Optional[str] = None
    email: Optional[str] = None
    old_password: Optional[str] = Field(default=None, alias="oldPassword")
    new_password: Optional[str] = Field(default=None, alias="newPassword")

    class Config:
        populate_by_name = True


class BoardEntry(BaseModel):
    email: str = Field(min_length=1)


class User(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True


class UserDetail(User):
    board: List[str] = []
