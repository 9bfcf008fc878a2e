"""
Helix request and body base classes.

Every endpoint is described by an immutable pydantic model whose fields are
the query parameters and whose class variables carry the endpoint metadata:
path, HTTP method, required scopes and the response payload type.
"""

from __future__ import annotations
import json
from enum import Enum
from functools import lru_cache
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, TypeAdapter


class NoContent(str, Enum):
    """Payload of endpoints that answer ``204 No Content``."""
    SUCCESS = "success"


class HelixRequest(BaseModel):
    """
    Base class for all Helix endpoint requests.

    Subclasses set ``PATH``, ``METHOD``, ``SCOPE`` and ``RESPONSE``. Fields
    left as ``None`` are omitted from the query string, list fields are
    repeated (``id=1&id=2``).
    """

    PATH: ClassVar[str] = ""
    METHOD: ClassVar[str] = "GET"
    SCOPE: ClassVar[Tuple[str, ...]] = ()
    OPT_SCOPE: ClassVar[Tuple[str, ...]] = ()
    RESPONSE: ClassVar[Any] = Any
    # Set on endpoints that reply 204 with no body
    NO_CONTENT: ClassVar[Optional[NoContent]] = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def query_pairs(self) -> List[Tuple[str, str]]:
        """Query parameters in field order."""
        pairs: List[Tuple[str, str]] = []
        for name, value in self.model_dump(by_alias=True, exclude_none=True, mode="json").items():
            if isinstance(value, list):
                pairs.extend((name, _format_value(v)) for v in value)
            else:
                pairs.append((name, _format_value(value)))
        return pairs

    def get_uri(self, base_url: str) -> str:
        """Full request URI under ``base_url``."""
        url = f"{base_url.rstrip('/')}/{self.PATH}"
        query = urlencode(self.query_pairs())
        if query:
            url = f"{url}?{query}"
        return url

    @classmethod
    def build_data(cls, payload: Dict[str, Any]) -> Any:
        """
        Select the part of a decoded response body that holds the payload.

        Most endpoints keep it under ``data``; endpoints whose payload is a
        single object wrapped in a one-element list override this.
        """
        return payload.get("data")

    @classmethod
    def parse_data(cls, data: Any) -> Any:
        """Validate raw payload data against ``RESPONSE``."""
        return response_adapter(cls.RESPONSE).validate_python(data)


class PaginatedRequest(HelixRequest):
    """
    A request for a cursor-paginated list endpoint.

    ``after`` carries the continuation cursor. The request itself is never
    mutated; ``with_cursor`` returns an updated copy.
    """

    after: Optional[str] = None

    def with_cursor(self, cursor: Optional[str]) -> PaginatedRequest:
        """Copy of this request pointing at ``cursor``."""
        return self.model_copy(update={"after": cursor})

    def query_pairs(self) -> List[Tuple[str, str]]:
        pairs = [pair for pair in super().query_pairs() if pair[0] != "after"]
        if self.after is not None:
            pairs.append(("after", self.after))
        return pairs


class SingleItemRequest(HelixRequest):
    """Request whose ``data`` is a one-element list holding the payload."""

    @classmethod
    def build_data(cls, payload: Dict[str, Any]) -> Any:
        data = payload.get("data")
        if isinstance(data, list):
            return data[0] if data else None
        return data


class HelixBody(BaseModel):
    """Base class for JSON request bodies."""

    # Wrap the serialized body as {"data": ...}
    WRAP_DATA: ClassVar[bool] = False

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API-compatible dictionary."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def to_json(self) -> bytes:
        body: Any = self.to_dict()
        if self.WRAP_DATA:
            body = {"data": body}
        return json.dumps(body).encode("utf-8")


class EmptyBody(HelixBody):
    """Body for POST/PUT endpoints that take none."""

    def to_json(self) -> bytes:
        return b""


BodyType = Union[HelixBody, Sequence[HelixBody], None]


def encode_body(body: BodyType) -> Optional[bytes]:
    """
    Serialize a request body.

    A sequence of bodies is sent as ``{"data": [...]}``. Returns None when
    there is nothing to send.
    """
    if body is None:
        return None
    if isinstance(body, HelixBody):
        payload = body.to_json()
    else:
        payload = json.dumps({"data": [item.to_dict() for item in body]}).encode("utf-8")
    return payload or None


@lru_cache(maxsize=None)
def response_adapter(response_type: Any) -> TypeAdapter:
    """Cached TypeAdapter for a response payload type."""
    return TypeAdapter(response_type)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


__all__ = [
    "NoContent",
    "HelixRequest",
    "PaginatedRequest",
    "SingleItemRequest",
    "HelixBody",
    "EmptyBody",
    "BodyType",
    "encode_body",
    "response_adapter",
]
