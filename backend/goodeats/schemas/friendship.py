"""Pydantic schemas for Friendships."""
from pydantic import BaseModel

from goodeats.schemas.user import UserPublic


class FriendListOut(BaseModel):
    count: int
    friends: list[UserPublic]
