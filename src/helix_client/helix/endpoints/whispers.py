"""
Whispers endpoints.

- Send Whisper (``POST whispers``)
"""

from __future__ import annotations
from typing import Any, ClassVar, Optional

from pydantic import Field

from ...types import UserId
from ..request import HelixBody, HelixRequest, NoContent


SendWhisperResponse = NoContent


class SendWhisperRequest(HelixRequest):
    PATH: ClassVar[str] = "whispers"
    METHOD: ClassVar[str] = "POST"
    SCOPE: ClassVar[tuple] = ("user:manage:whispers",)
    RESPONSE: ClassVar[Any] = SendWhisperResponse
    NO_CONTENT: ClassVar[Optional[NoContent]] = NoContent.SUCCESS

    from_user_id: UserId
    to_user_id: UserId


class SendWhisperBody(HelixBody):
    message: str = Field(min_length=1, max_length=10000)


__all__ = ["SendWhisperResponse", "SendWhisperRequest", "SendWhisperBody"]
