"""
Streams endpoints.

- Get Followed Streams (``GET streams/followed``, paginated)
"""

from __future__ import annotations
from typing import Any, ClassVar, List, Optional

from pydantic import BaseModel, Field

from ...types import CategoryId, Timestamp, UserId, UserName
from ..request import PaginatedRequest


class Stream(BaseModel):
    """A live stream."""
    id: str
    user_id: UserId
    user_login: UserName
    user_name: str
    game_id: CategoryId = ""
    game_name: str = ""
    type: str = "live"
    title: str = ""
    viewer_count: int = 0
    started_at: Timestamp
    language: str = ""
    thumbnail_url: str = ""
    tags: List[str] = Field(default_factory=list)
    is_mature: bool = False


class GetFollowedStreamsRequest(PaginatedRequest):
    """Live streams of channels the user follows."""

    PATH: ClassVar[str] = "streams/followed"
    SCOPE: ClassVar[tuple] = ("user:read:follows",)
    RESPONSE: ClassVar[Any] = List[Stream]

    user_id: UserId
    first: Optional[int] = Field(default=None, ge=1, le=100)


__all__ = ["Stream", "GetFollowedStreamsRequest"]
