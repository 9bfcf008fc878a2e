"""
Channels endpoints.

- Get Channel Information (``GET channels``)
- Get VIPs (``GET channels/vips``, paginated)
- Add Channel VIP (``POST channels/vips``)
- Remove Channel VIP (``DELETE channels/vips``)
"""

from __future__ import annotations
from typing import Any, ClassVar, List, Optional

from pydantic import BaseModel, Field

from ...types import CategoryId, UserId, UserName
from ..request import HelixRequest, NoContent, PaginatedRequest


class ChannelInformation(BaseModel):
    """Current channel properties of a broadcaster."""
    broadcaster_id: UserId
    broadcaster_login: UserName
    broadcaster_name: str
    broadcaster_language: str = ""
    game_id: CategoryId = ""
    game_name: str = ""
    title: str = ""
    delay: int = 0
    tags: List[str] = Field(default_factory=list)


class GetChannelInformationRequest(HelixRequest):
    PATH: ClassVar[str] = "channels"
    RESPONSE: ClassVar[Any] = List[ChannelInformation]

    broadcaster_id: List[UserId]

    @classmethod
    def for_broadcaster(cls, broadcaster_id: UserId) -> GetChannelInformationRequest:
        return cls(broadcaster_id=[broadcaster_id])


class Vip(BaseModel):
    user_id: UserId
    user_name: str
    user_login: UserName


class GetVipsRequest(PaginatedRequest):
    PATH: ClassVar[str] = "channels/vips"
    SCOPE: ClassVar[tuple] = ("channel:read:vips",)
    OPT_SCOPE: ClassVar[tuple] = ("channel:manage:vips",)
    RESPONSE: ClassVar[Any] = List[Vip]

    broadcaster_id: UserId
    user_id: List[UserId] = Field(default_factory=list)
    first: Optional[int] = Field(default=None, ge=1, le=100)


AddChannelVipResponse = NoContent
RemoveChannelVipResponse = NoContent


class AddChannelVipRequest(HelixRequest):
    PATH: ClassVar[str] = "channels/vips"
    METHOD: ClassVar[str] = "POST"
    SCOPE: ClassVar[tuple] = ("channel:manage:vips",)
    RESPONSE: ClassVar[Any] = AddChannelVipResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    broadcaster_id: UserId
    user_id: UserId


class RemoveChannelVipRequest(HelixRequest):
    PATH: ClassVar[str] = "channels/vips"
    METHOD: ClassVar[str] = "DELETE"
    SCOPE: ClassVar[tuple] = ("channel:manage:vips",)
    RESPONSE: ClassVar[Any] = RemoveChannelVipResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    broadcaster_id: UserId
    user_id: UserId


__all__ = [
    "ChannelInformation",
    "GetChannelInformationRequest",
    "Vip",
    "GetVipsRequest",
    "AddChannelVipResponse",
    "RemoveChannelVipResponse",
    "AddChannelVipRequest",
    "RemoveChannelVipRequest",
]
