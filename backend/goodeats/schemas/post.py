"""Pydantic schemas for the feed."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from goodeats.models.event import EventCategory
from goodeats.schemas.user import UserPublic


class PostCreate(BaseModel):
    content: str = Field(..., max_length=5000)
    event_id: Optional[str] = None
    images: Optional[list[str]] = None


class CommentCreate(BaseModel):
    content: str = Field(..., max_length=2000)


class CommentOut(BaseModel):
    comment_id: str
    post_id: str
    content: str
    created_at: datetime
    user: UserPublic

    model_config = {"from_attributes": True}


class PostEventOut(BaseModel):
    event_id: str
    title: str
    event_type: EventCategory

    model_config = {"from_attributes": True}


class PostOut(BaseModel):
    post_id: str
    content: str
    images: Optional[list[str]] = None
    likes_count: int
    liked_by_me: bool = False
    created_at: datetime
    user: UserPublic
    event: Optional[PostEventOut] = None
    comments: list[CommentOut] = []

    model_config = {"from_attributes": True}


class LikeOut(BaseModel):
    post_id: str
    liked: bool
    likes_count: int
