"""
Subscriptions endpoints.

- Get Broadcaster Subscriptions (``GET subscriptions``, paginated). The
  response also carries ``total`` and ``points`` (found in ``Response.other``).
"""

from __future__ import annotations
from typing import Any, ClassVar, List, Optional

from pydantic import BaseModel, Field

from ...types import OptionalString, UserId, UserName
from ..request import PaginatedRequest


class BroadcasterSubscription(BaseModel):
    broadcaster_id: UserId
    broadcaster_login: UserName
    broadcaster_name: str
    gifter_id: OptionalString = None
    gifter_login: OptionalString = None
    gifter_name: OptionalString = None
    is_gift: bool = False
    plan_name: str = ""
    tier: str
    user_id: UserId
    user_name: str
    user_login: UserName


class GetBroadcasterSubscriptionsRequest(PaginatedRequest):
    PATH: ClassVar[str] = "subscriptions"
    SCOPE: ClassVar[tuple] = ("channel:read:subscriptions",)
    RESPONSE: ClassVar[Any] = List[BroadcasterSubscription]

    broadcaster_id: UserId
    user_id: List[UserId] = Field(default_factory=list)
    first: Optional[int] = Field(default=None, ge=1, le=100)


__all__ = ["BroadcasterSubscription", "GetBroadcasterSubscriptionsRequest"]
