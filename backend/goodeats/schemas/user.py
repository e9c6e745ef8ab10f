"""Pydantic schemas for Users and profiles."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class UserPublic(BaseModel):
    user_id: str
    username: str
    full_name: str
    avatar_url: Optional[str] = None

    model_config = {"from_attributes": True}


class UserOut(BaseModel):
    user_id: str
    email: str
    username: str
    full_name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    dietary_preferences: Optional[list[str]] = None
    location: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    username: Optional[str] = Field(None, max_length=50)
    full_name: Optional[str] = Field(None, max_length=150)
    avatar_url: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = None
    dietary_preferences: Optional[list[str]] = None
    location: Optional[str] = Field(None, max_length=255)
