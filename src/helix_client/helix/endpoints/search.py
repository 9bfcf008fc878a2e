"""
Search endpoints.

- Search Categories (``GET search/categories``, paginated)
- Search Channels (``GET search/channels``, paginated): channels that
  streamed within the past six months whose name or description match
"""

from __future__ import annotations
from typing import Any, ClassVar, List, Optional

from pydantic import BaseModel, Field

from ...types import CategoryId, OptionalTimestamp, TagId, UserId, UserName
from ..request import PaginatedRequest


class Category(BaseModel):
    id: CategoryId
    name: str
    box_art_url: str = ""


class SearchCategoriesRequest(PaginatedRequest):
    PATH: ClassVar[str] = "search/categories"
    RESPONSE: ClassVar[Any] = List[Category]

    query: str
    first: Optional[int] = Field(default=None, ge=1, le=100)


class Channel(BaseModel):
    """A channel returned by a channel search."""
    id: UserId
    broadcaster_login: UserName
    display_name: str
    broadcaster_language: str = ""
    game_id: CategoryId = ""
    game_name: str = ""
    title: str = ""
    thumbnail_url: str = ""
    is_live: bool = False
    # Only set while live
    started_at: OptionalTimestamp = None
    tag_ids: List[TagId] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class SearchChannelsRequest(PaginatedRequest):
    PATH: ClassVar[str] = "search/channels"
    RESPONSE: ClassVar[Any] = List[Channel]

    query: str
    first: Optional[int] = Field(default=None, ge=1, le=100)
    live_only: Optional[bool] = None


__all__ = [
    "Category",
    "SearchCategoriesRequest",
    "Channel",
    "SearchChannelsRequest",
]
