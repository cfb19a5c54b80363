# schemas.py
from typing import Any, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str


class UploadResponse(MessageResponse):
    url: str


# --- Comment Schemas ---
class CommentCreate(BaseModel):
    user_id: Optional[int] = Field(None, alias="userId")
    comment_text: Optional[str] = Field(None, alias="commentText")

    class Config:
        populate_by_name = True


# --- Rating Schemas ---
class RatingCreate(BaseModel):
    user_id: Optional[int] = Field(None, alias="userId")
    stars: Optional[Any] = None  # validated by routers.consumers.parse_stars

    class Config:
        populate_by_name = True


# --- User Schemas ---
class UserCreate(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password_hash: Optional[str] = Field(None, alias="passwordHash")
    role: Optional[str] = None

    class Config:
        populate_by_name = True


class UserLogin(BaseModel):
    email: str
    password_hash: str = Field(..., alias="passwordHash")

    class Config:
        populate_by_name = True
