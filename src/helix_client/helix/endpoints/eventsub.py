"""
EventSub endpoints.

- Create EventSub Subscription (``POST eventsub/subscriptions``). The
  response also carries ``total``, ``total_cost`` and ``max_total_cost``.
"""

from __future__ import annotations
from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, Field, model_validator

from ...types import Timestamp
from ..request import HelixBody, SingleItemRequest


class Transport(BaseModel):
    """Delivery method: ``webhook`` needs callback and secret, ``websocket`` a session id."""
    method: str
    callback: Optional[str] = None
    secret: Optional[str] = None
    session_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_method(self):
        if self.method == "webhook" and not self.callback:
            raise ValueError("webhook transport requires a callback")
        if self.method == "websocket" and not self.session_id:
            raise ValueError("websocket transport requires a session_id")
        return self


class EventSubSubscription(BaseModel):
    id: str
    status: str
    type: str
    version: str
    condition: Dict[str, Any] = Field(default_factory=dict)
    created_at: Timestamp
    transport: Dict[str, Any] = Field(default_factory=dict)
    cost: int = 0


class CreateEventSubSubscriptionRequest(SingleItemRequest):
    PATH: ClassVar[str] = "eventsub/subscriptions"
    METHOD: ClassVar[str] = "POST"
    RESPONSE: ClassVar[Any] = EventSubSubscription


class CreateEventSubSubscriptionBody(HelixBody):
    type: str
    version: str
    condition: Dict[str, Any]
    transport: Transport


__all__ = [
    "Transport",
    "EventSubSubscription",
    "CreateEventSubSubscriptionRequest",
    "CreateEventSubSubscriptionBody",
]
