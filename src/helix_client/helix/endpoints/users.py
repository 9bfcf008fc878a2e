"""
Users endpoints.

- Get Users (``GET users``)
- Get Users Follows (``GET users/follows``, paginated)
- Block User (``PUT users/blocks``)
- Unblock User (``DELETE users/blocks``)
"""

from __future__ import annotations
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, Field

from ...types import OptionalString, Timestamp, UserId, UserName
from ..request import HelixRequest, NoContent, PaginatedRequest


class User(BaseModel):
    """A Twitch user."""
    id: UserId
    login: UserName
    display_name: str
    type: str = ""
    broadcaster_type: str = ""
    description: str = ""
    profile_image_url: OptionalString = None
    offline_image_url: OptionalString = None
    view_count: Optional[int] = None
    email: Optional[str] = None
    created_at: Optional[Timestamp] = None


class GetUsersRequest(HelixRequest):
    """Look up users by id and/or login, at most 100 in total."""

    PATH: ClassVar[str] = "users"
    RESPONSE: ClassVar[Any] = List[User]

    id: List[UserId] = Field(default_factory=list)
    login: List[UserName] = Field(default_factory=list)

    @classmethod
    def logins(cls, *logins: UserName) -> GetUsersRequest:
        return cls(login=list(logins))

    @classmethod
    def ids(cls, *ids: UserId) -> GetUsersRequest:
        return cls(id=list(ids))


class FollowRelationship(BaseModel):
    """One user following another."""
    from_id: UserId
    from_login: UserName
    from_name: str
    to_id: UserId
    to_login: UserName
    to_name: str
    followed_at: Timestamp


class UsersFollows(BaseModel):
    """Page of follow relationships with the overall total."""
    total: int = 0
    follow_relationships: List[FollowRelationship] = Field(default_factory=list)


class GetUsersFollowsRequest(PaginatedRequest):
    """Follow relationships between users, filtered by follower and/or followed user."""

    PATH: ClassVar[str] = "users/follows"
    RESPONSE: ClassVar[Any] = UsersFollows

    first: Optional[int] = Field(default=None, ge=1, le=100)
    from_id: Optional[UserId] = None
    to_id: Optional[UserId] = None

    @classmethod
    def followers(cls, to_id: UserId) -> GetUsersFollowsRequest:
        return cls(to_id=to_id)

    @classmethod
    def build_data(cls, payload: Dict[str, Any]) -> Any:
        return {
            "total": payload.get("total", 0),
            "follow_relationships": payload.get("data") or [],
        }


BlockUser = NoContent
UnblockUser = NoContent


class BlockUserRequest(HelixRequest):
    PATH: ClassVar[str] = "users/blocks"
    METHOD: ClassVar[str] = "PUT"
    SCOPE: ClassVar[tuple] = ("user:manage:blocked_users",)
    RESPONSE: ClassVar[Any] = BlockUser
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    target_user_id: UserId
    source_context: Optional[str] = None
    reason: Optional[str] = None


class UnblockUserRequest(HelixRequest):
    PATH: ClassVar[str] = "users/blocks"
    METHOD: ClassVar[str] = "DELETE"
    SCOPE: ClassVar[tuple] = ("user:manage:blocked_users",)
    RESPONSE: ClassVar[Any] = UnblockUser
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    target_user_id: UserId


__all__ = [
    "User",
    "GetUsersRequest",
    "FollowRelationship",
    "UsersFollows",
    "GetUsersFollowsRequest",
    "BlockUser",
    "UnblockUser",
    "BlockUserRequest",
    "UnblockUserRequest",
]
