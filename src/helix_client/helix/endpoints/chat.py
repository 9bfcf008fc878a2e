"""
Chat endpoints.

- Get Chatters (``GET chat/chatters``, paginated)
- Get Global Emotes, Get Channel Emotes, Get Emote Sets
- Get Chat Settings
- Send Chat Announcement
- Get/Update User Chat Color
"""

from __future__ import annotations
from enum import Enum
from typing import Any, ClassVar, List, Optional

from pydantic import BaseModel, Field

from ...types import EmoteId, EmoteSetId, OptionalString, UserId, UserName
from ..request import HelixBody, HelixRequest, NoContent, PaginatedRequest, SingleItemRequest


class Chatter(BaseModel):
    """A user connected to a broadcaster's chat."""
    user_id: UserId
    user_login: UserName
    user_name: str


class GetChattersRequest(PaginatedRequest):
    PATH: ClassVar[str] = "chat/chatters"
    SCOPE: ClassVar[tuple] = ("moderator:read:chatters",)
    RESPONSE: ClassVar[Any] = List[Chatter]

    broadcaster_id: UserId
    moderator_id: UserId
    first: Optional[int] = Field(default=None, ge=1, le=1000)


class EmoteImages(BaseModel):
    url_1x: str
    url_2x: str
    url_4x: str


class GlobalEmote(BaseModel):
    id: EmoteId
    name: str
    images: EmoteImages
    format: List[str] = Field(default_factory=list)
    scale: List[str] = Field(default_factory=list)
    theme_mode: List[str] = Field(default_factory=list)


class GetGlobalEmotesRequest(HelixRequest):
    PATH: ClassVar[str] = "chat/emotes/global"
    RESPONSE: ClassVar[Any] = List[GlobalEmote]


class ChannelEmote(GlobalEmote):
    tier: OptionalString = None
    emote_type: str = ""
    emote_set_id: EmoteSetId = ""


class GetChannelEmotesRequest(HelixRequest):
    PATH: ClassVar[str] = "chat/emotes"
    RESPONSE: ClassVar[Any] = List[ChannelEmote]

    broadcaster_id: UserId


class Emote(GlobalEmote):
    """Emote belonging to an emote set."""
    emote_type: str = ""
    emote_set_id: EmoteSetId = ""
    owner_id: UserId = ""


class GetEmoteSetsRequest(HelixRequest):
    PATH: ClassVar[str] = "chat/emotes/set"
    RESPONSE: ClassVar[Any] = List[Emote]

    emote_set_id: List[EmoteSetId]


class ChatSettings(BaseModel):
    broadcaster_id: UserId
    emote_mode: bool = False
    follower_mode: bool = False
    follower_mode_duration: Optional[int] = None
    moderator_id: Optional[UserId] = None
    non_moderator_chat_delay: Optional[bool] = None
    non_moderator_chat_delay_duration: Optional[int] = None
    slow_mode: bool = False
    slow_mode_wait_time: Optional[int] = None
    subscriber_mode: bool = False
    unique_chat_mode: bool = False


class GetChatSettingsRequest(SingleItemRequest):
    PATH: ClassVar[str] = "chat/settings"
    OPT_SCOPE: ClassVar[tuple] = ("moderator:read:chat_settings",)
    RESPONSE: ClassVar[Any] = ChatSettings

    broadcaster_id: UserId
    moderator_id: Optional[UserId] = None


class AnnouncementColor(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    ORANGE = "orange"
    PURPLE = "purple"
    PRIMARY = "primary"


SendChatAnnouncementResponse = NoContent


class SendChatAnnouncementRequest(HelixRequest):
    PATH: ClassVar[str] = "chat/announcements"
    METHOD: ClassVar[str] = "POST"
    SCOPE: ClassVar[tuple] = ("moderator:manage:announcements",)
    RESPONSE: ClassVar[Any] = SendChatAnnouncementResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    broadcaster_id: UserId
    moderator_id: UserId


class SendChatAnnouncementBody(HelixBody):
    message: str = Field(max_length=500)
    color: AnnouncementColor = AnnouncementColor.PRIMARY


class UserChatColor(BaseModel):
    user_id: UserId
    user_name: str
    user_login: UserName
    # Empty when the user never set a color
    color: OptionalString = None


class GetUserChatColorRequest(HelixRequest):
    PATH: ClassVar[str] = "chat/color"
    RESPONSE: ClassVar[Any] = List[UserChatColor]

    user_id: List[UserId]


UpdateUserChatColorResponse = NoContent


class UpdateUserChatColorRequest(HelixRequest):
    """
    Set a user's chat color.

    ``color`` is either a named color (``blue``, ``hot_pink`` ...) or, for
    Turbo and Prime users, a hex code like ``#9146FF``.
    """

    PATH: ClassVar[str] = "chat/color"
    METHOD: ClassVar[str] = "PUT"
    SCOPE: ClassVar[tuple] = ("user:manage:chat_color",)
    RESPONSE: ClassVar[Any] = UpdateUserChatColorResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    user_id: UserId
    color: str


__all__ = [
    "Chatter",
    "GetChattersRequest",
    "EmoteImages",
    "GlobalEmote",
    "GetGlobalEmotesRequest",
    "ChannelEmote",
    "GetChannelEmotesRequest",
    "Emote",
    "GetEmoteSetsRequest",
    "ChatSettings",
    "GetChatSettingsRequest",
    "AnnouncementColor",
    "SendChatAnnouncementResponse",
    "SendChatAnnouncementRequest",
    "SendChatAnnouncementBody",
    "UserChatColor",
    "GetUserChatColorRequest",
    "UpdateUserChatColorResponse",
    "UpdateUserChatColorRequest",
]
