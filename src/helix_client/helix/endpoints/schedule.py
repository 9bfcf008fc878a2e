"""
Schedule endpoints.

- Get Channel Stream Schedule (``GET schedule``, paginated). The payload is
  one ScheduledBroadcasts object; its ``segments`` are the paginated items.
  Recurring segments repeat indefinitely, so consumers should bound the
  stream (``take_while`` or ``collect(limit=...)``).
- Create Channel Stream Schedule Segment (``POST schedule/segment``)
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, ClassVar, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ...types import CategoryId, Timestamp, UserId, UserName
from ..request import HelixBody, HelixRequest, PaginatedRequest


class SegmentCategory(BaseModel):
    id: CategoryId
    name: str


class Segment(BaseModel):
    """One scheduled broadcast."""
    id: str
    start_time: Timestamp
    end_time: Optional[Timestamp] = None
    title: str = ""
    canceled_until: Optional[Timestamp] = None
    category: Optional[SegmentCategory] = None
    is_recurring: bool = False


class Vacation(BaseModel):
    start_time: Timestamp
    end_time: Timestamp


class ScheduledBroadcasts(BaseModel):
    broadcaster_id: UserId
    broadcaster_name: str
    broadcaster_login: UserName
    segments: List[Segment] = Field(default_factory=list)
    vacation: Optional[Vacation] = None

    @field_validator("segments", mode="before")
    @classmethod
    def _null_segments(cls, value):
        # Twitch sends null when a schedule has no segments
        return value or []


class GetChannelStreamScheduleRequest(PaginatedRequest):
    PATH: ClassVar[str] = "schedule"
    RESPONSE: ClassVar[Any] = ScheduledBroadcasts

    broadcaster_id: UserId
    id: List[str] = Field(default_factory=list)
    start_time: Optional[Timestamp] = None
    first: Optional[int] = Field(default=None, ge=1, le=25)


class CreateChannelStreamScheduleSegmentRequest(HelixRequest):
    PATH: ClassVar[str] = "schedule/segment"
    METHOD: ClassVar[str] = "POST"
    SCOPE: ClassVar[tuple] = ("channel:manage:schedule",)
    RESPONSE: ClassVar[Any] = ScheduledBroadcasts

    broadcaster_id: UserId


class CreateChannelStreamScheduleSegmentBody(HelixBody):
    """
    New schedule segment.

    ``duration`` is in minutes, ``timezone`` an IANA name such as
    ``America/New_York``.
    """

    start_time: Timestamp
    timezone: str
    is_recurring: bool
    duration: Optional[str] = None
    category_id: Optional[CategoryId] = None
    title: Optional[str] = Field(default=None, max_length=140)

    @field_validator("start_time", mode="before")
    @classmethod
    def _format_start(cls, value: Union[str, datetime]):
        if isinstance(value, datetime):
            return value.strftime("%Y-%m-%dT%H:%M:%SZ")
        return value


__all__ = [
    "SegmentCategory",
    "Segment",
    "Vacation",
    "ScheduledBroadcasts",
    "GetChannelStreamScheduleRequest",
    "CreateChannelStreamScheduleSegmentRequest",
    "CreateChannelStreamScheduleSegmentBody",
]
