"""
Helix response envelope.

A Response wraps one decoded payload together with the pagination cursor,
the optional total count and the request that produced it, so the next page
can be requested without the caller supplying the parameters again.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Generic, Optional, TypeVar

from ..runtime.errors import ErrorCode, HelixError
from .request import HelixRequest, PaginatedRequest

if TYPE_CHECKING:
    from ..auth import TwitchToken
    from .client import HelixClient


R = TypeVar("R", bound=HelixRequest)
D = TypeVar("D")


@dataclass
class Response(Generic[R, D]):
    """Decoded result of one Helix call."""

    data: D
    pagination: Optional[str] = None
    request: Optional[R] = None
    total: Optional[int] = None
    other: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_next(self) -> bool:
        return self.pagination is not None

    def first(self) -> Optional[Any]:
        """First element of a list payload, or None if it is empty."""
        if isinstance(self.data, list):
            return self.data[0] if self.data else None
        return self.data

    async def get_next(self, client: HelixClient, token: TwitchToken) -> Optional[Response]:
        """
        Fetch the page after this one.

        Returns:
            The next Response, or None if this response carries no cursor

        Raises:
            HelixError: If the originating request is unknown or not paginated,
                or the call itself fails
        """
        if self.pagination is None:
            return None
        if self.request is None:
            raise HelixError("cannot continue a response without its request", ErrorCode.NOT_PAGINATED)
        if not isinstance(self.request, PaginatedRequest):
            raise HelixError(
                f"{type(self.request).__name__} is not paginated",
                ErrorCode.NOT_PAGINATED,
            )
        return await client.req_get(self.request.with_cursor(self.pagination), token)


__all__ = ["Response"]
