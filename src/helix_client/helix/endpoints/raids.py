"""
Raids endpoints.

- Start a raid (``POST raids``)
- Cancel a raid (``DELETE raids``)
"""

from __future__ import annotations
from typing import Any, ClassVar, Optional

from pydantic import BaseModel

from ...types import Timestamp, UserId
from ..request import HelixRequest, NoContent, SingleItemRequest


class StartARaidResponse(BaseModel):
    created_at: Timestamp
    is_mature: bool = False


class StartARaidRequest(SingleItemRequest):
    PATH: ClassVar[str] = "raids"
    METHOD: ClassVar[str] = "POST"
    SCOPE: ClassVar[tuple] = ("channel:manage:raids",)
    RESPONSE: ClassVar[Any] = StartARaidResponse

    from_broadcaster_id: UserId
    to_broadcaster_id: UserId


CancelARaidResponse = NoContent


class CancelARaidRequest(HelixRequest):
    PATH: ClassVar[str] = "raids"
    METHOD: ClassVar[str] = "DELETE"
    SCOPE: ClassVar[tuple] = ("channel:manage:raids",)
    RESPONSE: ClassVar[Any] = CancelARaidResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    broadcaster_id: UserId


__all__ = [
    "StartARaidResponse",
    "StartARaidRequest",
    "CancelARaidResponse",
    "CancelARaidRequest",
]
