"""
Moderation endpoints.

- Get Moderators / Get Banned Users (paginated)
- Ban User / Unban User
- Check AutoMod Status
- Delete Chat Messages
- Add / Remove Channel Moderator
"""

from __future__ import annotations
from typing import Any, ClassVar, List, Optional

from pydantic import BaseModel, Field

from ...types import MsgId, OptionalTimestamp, Timestamp, UserId, UserName
from ..request import HelixBody, HelixRequest, NoContent, PaginatedRequest, SingleItemRequest


class Moderator(BaseModel):
    user_id: UserId
    user_login: UserName
    user_name: str


class GetModeratorsRequest(PaginatedRequest):
    PATH: ClassVar[str] = "moderation/moderators"
    SCOPE: ClassVar[tuple] = ("moderation:read",)
    RESPONSE: ClassVar[Any] = List[Moderator]

    broadcaster_id: UserId
    user_id: List[UserId] = Field(default_factory=list)
    first: Optional[int] = Field(default=None, ge=1, le=100)


class BannedUser(BaseModel):
    user_id: UserId
    user_login: UserName
    user_name: str
    # Empty for permanent bans
    expires_at: OptionalTimestamp = None
    created_at: Optional[Timestamp] = None
    reason: str = ""
    moderator_id: UserId = ""
    moderator_login: UserName = ""
    moderator_name: str = ""


class GetBannedUsersRequest(PaginatedRequest):
    PATH: ClassVar[str] = "moderation/banned"
    SCOPE: ClassVar[tuple] = ("moderation:read",)
    RESPONSE: ClassVar[Any] = List[BannedUser]

    broadcaster_id: UserId
    user_id: List[UserId] = Field(default_factory=list)
    first: Optional[int] = Field(default=None, ge=1, le=100)


class BanUser(BaseModel):
    """Result of a ban or timeout."""
    broadcaster_id: UserId
    moderator_id: UserId
    user_id: UserId
    created_at: Timestamp
    # None for permanent bans
    end_time: OptionalTimestamp = None


class BanUserRequest(SingleItemRequest):
    PATH: ClassVar[str] = "moderation/bans"
    METHOD: ClassVar[str] = "POST"
    SCOPE: ClassVar[tuple] = ("moderator:manage:banned_users",)
    RESPONSE: ClassVar[Any] = BanUser

    broadcaster_id: UserId
    moderator_id: UserId


class BanUserBody(HelixBody):
    """Ban a user, or time them out when ``duration`` (seconds) is set."""

    WRAP_DATA: ClassVar[bool] = True

    user_id: UserId
    reason: str = Field(default="", max_length=500)
    duration: Optional[int] = Field(default=None, ge=1, le=1_209_600)


UnbanUserResponse = NoContent


class UnbanUserRequest(HelixRequest):
    PATH: ClassVar[str] = "moderation/bans"
    METHOD: ClassVar[str] = "DELETE"
    SCOPE: ClassVar[tuple] = ("moderator:manage:banned_users",)
    RESPONSE: ClassVar[Any] = UnbanUserResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    broadcaster_id: UserId
    moderator_id: UserId
    user_id: UserId


class CheckAutoModStatus(BaseModel):
    """Whether one message meets the channel's AutoMod requirements."""
    msg_id: MsgId
    is_permitted: bool


class CheckAutoModStatusRequest(HelixRequest):
    """Sent with a list of CheckAutoModStatusBody; the list is wrapped in ``data``."""

    PATH: ClassVar[str] = "moderation/enforcements/status"
    METHOD: ClassVar[str] = "POST"
    SCOPE: ClassVar[tuple] = ("moderation:read",)
    RESPONSE: ClassVar[Any] = List[CheckAutoModStatus]

    broadcaster_id: UserId


class CheckAutoModStatusBody(HelixBody):
    msg_id: MsgId
    msg_text: str


DeleteChatMessagesResponse = NoContent


class DeleteChatMessagesRequest(HelixRequest):
    """Delete one message, or every message when ``message_id`` is unset."""

    PATH: ClassVar[str] = "moderation/chat"
    METHOD: ClassVar[str] = "DELETE"
    SCOPE: ClassVar[tuple] = ("moderator:manage:chat_messages",)
    RESPONSE: ClassVar[Any] = DeleteChatMessagesResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    broadcaster_id: UserId
    moderator_id: UserId
    message_id: Optional[MsgId] = None


AddChannelModeratorResponse = NoContent
RemoveChannelModeratorResponse = NoContent


class AddChannelModeratorRequest(HelixRequest):
    PATH: ClassVar[str] = "moderation/moderators"
    METHOD: ClassVar[str] = "POST"
    SCOPE: ClassVar[tuple] = ("channel:manage:moderators",)
    RESPONSE: ClassVar[Any] = AddChannelModeratorResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    broadcaster_id: UserId
    user_id: UserId


class RemoveChannelModeratorRequest(HelixRequest):
    PATH: ClassVar[str] = "moderation/moderators"
    METHOD: ClassVar[str] = "DELETE"
    SCOPE: ClassVar[tuple] = ("channel:manage:moderators",)
    RESPONSE: ClassVar[Any] = RemoveChannelModeratorResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    broadcaster_id: UserId
    user_id: UserId


__all__ = [
    "Moderator",
    "GetModeratorsRequest",
    "BannedUser",
    "GetBannedUsersRequest",
    "BanUser",
    "BanUserRequest",
    "BanUserBody",
    "UnbanUserResponse",
    "UnbanUserRequest",
    "CheckAutoModStatus",
    "CheckAutoModStatusRequest",
    "CheckAutoModStatusBody",
    "DeleteChatMessagesResponse",
    "DeleteChatMessagesRequest",
    "AddChannelModeratorResponse",
    "RemoveChannelModeratorResponse",
    "AddChannelModeratorRequest",
    "RemoveChannelModeratorRequest",
]
