"""
Paginated endpoints as lazy async streams.

``make_stream`` turns any cursor-paginated Helix request into a PageStream:
an async iterator that yields individual items, fetches the first page on
the first pull and each further page only once the previous one has been
drained.

The stream is a small state machine. Every state is an immutable value and
each pull replaces the current state with the one its transition returns:

    Pending(request)           no call made yet
    Draining(response, items)  page fetched, items left to hand out
    AwaitingNext(response)     page drained, response holds the cursor
    Failed()                   a call failed; the error has been raised
    Done(reason)               no cursor left, or a page came back empty

A failed call raises its HelixError from ``__anext__`` exactly once; every
later pull raises StopAsyncIteration. Nothing is retried.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING, Any, AsyncIterator, Awaitable, Callable, Generic, Iterable,
    List, Optional, Tuple, TypeVar, Union,
)

from .request import PaginatedRequest
from .response import Response

if TYPE_CHECKING:
    from ..auth import TwitchToken
    from .client import HelixClient


logger = logging.getLogger(__name__)

Item = TypeVar("Item")
Extract = Callable[[Any], Iterable[Item]]


# =============================================================================
# States
# =============================================================================

@dataclass(frozen=True)
class Pending:
    request: PaginatedRequest


@dataclass(frozen=True)
class Draining(Generic[Item]):
    response: Response
    items: Tuple[Item, ...]
    position: int = 0

    @property
    def remaining(self) -> int:
        return len(self.items) - self.position


@dataclass(frozen=True)
class AwaitingNext:
    response: Response


@dataclass(frozen=True)
class Rejected:
    """Stream refused before its first call."""
    error: Exception


@dataclass(frozen=True)
class Failed:
    pass


@dataclass(frozen=True)
class Done:
    reason: str


State = Union[Pending, Draining, AwaitingNext, Rejected, Failed, Done]

# Marks a transition that produced no item
_NO_ITEM: Any = object()


# =============================================================================
# Transitions
# =============================================================================

def open_page(response: Response, extract: Extract) -> Tuple[State, Any]:
    """
    Enter a freshly fetched page.

    Returns the next state and the first item of the page, or ``Done`` and
    no item if the page extracted to nothing. A cursor on an empty page is
    ignored.
    """
    items = tuple(extract(response.data))
    if not items:
        return Done("empty page"), _NO_ITEM
    if len(items) == 1:
        return AwaitingNext(response), items[0]
    return Draining(response, items, 1), items[0]


def drain(state: Draining) -> Tuple[State, Any]:
    """Hand out the next buffered item."""
    if state.remaining <= 0:
        # Only reachable with a buffer that was empty from the start
        return Done("empty page"), _NO_ITEM
    item = state.items[state.position]
    if state.remaining == 1:
        return AwaitingNext(state.response), item
    return Draining(state.response, state.items, state.position + 1), item


# =============================================================================
# Stream
# =============================================================================

class PageStream(Generic[Item]):
    """
    Lazy, forward-only async iterator over the items of a paginated endpoint.

    The stream keeps no coroutine suspended between pulls, so it can be
    dropped at any point without being closed. It is meant for a single
    consumer; iterate it again by building a new stream.

    ``calls`` counts page requests that completed or failed; a cancelled
    pull is not counted. Any error, including one raised by ``extract``,
    is raised once and ends the stream.

    Example:
        ```python
        stream = make_stream(GetModeratorsRequest(broadcaster_id="1234"), token, client)
        async for moderator in stream:
            print(moderator.user_login)
        ```
    """

    def __init__(self, request: Optional[PaginatedRequest], token: Optional[TwitchToken],
                 client: Optional[HelixClient], extract: Optional[Extract] = None,
                 _state: Optional[State] = None):
        self._token = token
        self._client = client
        self._extract: Extract = extract or list
        self._state: State = _state if _state is not None else Pending(request)
        self.calls = 0

    @classmethod
    def failing(cls, error: Exception) -> PageStream:
        """A stream that raises ``error`` on its first pull and then stops, without any call."""
        return cls(None, None, None, _state=Rejected(error))

    @property
    def state(self) -> State:
        return self._state

    @property
    def failed(self) -> bool:
        return isinstance(self._state, Failed)

    @property
    def exhausted(self) -> bool:
        return isinstance(self._state, (Failed, Done))

    def __aiter__(self) -> PageStream[Item]:
        return self

    async def __anext__(self) -> Item:
        state = self._state

        if isinstance(state, Pending):
            response = await self._fetch(
                lambda: self._client.req_get(state.request, self._token),
                state.request.PATH, state.request.after,
            )
            next_state, item = self._open(response)

        elif isinstance(state, Draining):
            next_state, item = drain(state)

        elif isinstance(state, AwaitingNext):
            if state.response.pagination is None:
                self._finish(Done("no cursor"))
                raise StopAsyncIteration
            response = await self._fetch(
                lambda: state.response.get_next(self._client, self._token),
                _path(state.response), state.response.pagination,
            )
            if response is None:
                self._finish(Done("no cursor"))
                raise StopAsyncIteration
            next_state, item = self._open(response)

        elif isinstance(state, Rejected):
            self._state = Failed()
            raise state.error

        else:
            raise StopAsyncIteration

        self._finish(next_state)
        if item is _NO_ITEM:
            raise StopAsyncIteration
        return item

    async def _fetch(self, call: Callable[[], Awaitable[Optional[Response]]],
                     path: str, cursor: Optional[str]) -> Optional[Response]:
        try:
            response = await call()
        except Exception as e:
            self.calls += 1
            logger.debug(f"Page {self.calls} of {path} failed: {e}")
            self._state = Failed()
            raise
        self.calls += 1
        if response is not None:
            logger.debug(
                f"Fetched page {self.calls} of {path} (after={cursor}, next={response.pagination})"
            )
        return response

    def _open(self, response: Response) -> Tuple[State, Any]:
        try:
            return open_page(response, self._extract)
        except Exception as e:
            logger.debug(f"Extracting page {self.calls} of {_path(response)} failed: {e}")
            self._state = Failed()
            raise

    def _finish(self, state: State) -> None:
        if isinstance(state, Done):
            logger.debug(f"Stream finished after {self.calls} calls: {state.reason}")
        self._state = state

    # =========================================================================
    # Consumption helpers
    # =========================================================================

    async def collect(self, limit: Optional[int] = None) -> List[Item]:
        """
        Gather items into a list.

        Args:
            limit: Stop after this many items (no further pages are fetched)

        Raises:
            HelixError: If a call fails; items gathered so far are lost
        """
        items: List[Item] = []
        if limit is not None and limit <= 0:
            return items
        async for item in self:
            items.append(item)
            if limit is not None and len(items) >= limit:
                break
        return items

    async def take_while(self, predicate: Callable[[Item], bool]) -> AsyncIterator[Item]:
        """Yield items until ``predicate`` fails; the failing item is consumed but not yielded."""
        async for item in self:
            if not predicate(item):
                return
            yield item

    async def first(self) -> Optional[Item]:
        """First item, or None if the stream is empty."""
        async for item in self:
            return item
        return None


def make_stream(request: PaginatedRequest, token: TwitchToken, client: HelixClient,
                extract: Optional[Extract] = None) -> PageStream:
    """
    Make a paginated request into a lazy stream of items.

    Args:
        request: Initial request; its cursor is advanced for each page
        token: Token authorizing every page call
        client: Executor performing the calls
        extract: Maps one page payload to its items (default: ``list``)

    Returns:
        PageStream; no call is made until it is iterated

    Example:
        ```python
        req = GetChannelStreamScheduleRequest(broadcaster_id="1234")
        segments = make_stream(req, token, client, lambda s: s.segments)
        first_ten = await segments.collect(limit=10)
        ```
    """
    if not isinstance(request, PaginatedRequest):
        raise TypeError(f"{type(request).__name__} is not a paginated request")
    return PageStream(request, token, client, extract)


def _path(response: Response) -> str:
    return response.request.PATH if response.request is not None else "?"


__all__ = [
    "Pending",
    "Draining",
    "AwaitingNext",
    "Rejected",
    "Failed",
    "Done",
    "State",
    "open_page",
    "drain",
    "PageStream",
    "make_stream",
]
