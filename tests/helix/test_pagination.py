"""
Tests for paginated streams.

Covers laziness, ordering, one call per page, termination on an empty page
or a missing cursor, error terminality, abandoning and cancelling a stream.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import MockHttpClient, mk_chatter, mk_token, page, raw_response

from helix_client import ClientConfig, HelixClient
from helix_client.helix.endpoints.chat import Chatter, GetChattersRequest
from helix_client.helix.endpoints.moderation import GetModeratorsRequest
from helix_client.helix.endpoints.users import GetUsersRequest
from helix_client.helix.pagination import (
    AwaitingNext, Done, Draining, Failed, PageStream, Pending, drain, make_stream, open_page,
)
from helix_client.helix.response import Response
from helix_client.runtime.errors import (
    CustomError, DecodeError, ErrorCode, HelixError, NetworkError,
)


Page = Tuple[Sequence[Any], Optional[str]]


class FakeExecutor:
    """
    Executor stand-in answering ``req_get`` with scripted pages.

    Each script entry is ``(items, cursor)`` or an exception to raise.
    """

    def __init__(self, script: Sequence[Union[Page, Exception]], gate: Optional[asyncio.Event] = None):
        self.script = list(script)
        self.requests: List[Any] = []
        self.gate = gate

    async def req_get(self, request, token):
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        reply = self.script.pop(0)
        if isinstance(reply, Exception):
            raise reply
        items, cursor = reply
        return Response(data=list(items), pagination=cursor, request=request)


def mods_request() -> GetModeratorsRequest:
    return GetModeratorsRequest(broadcaster_id="1234")


async def drain_all(stream: PageStream) -> List[Any]:
    return [item async for item in stream]


class TestLaziness:
    """No call happens until the first item is requested."""

    @pytest.mark.asyncio
    async def test_construction_makes_no_call(self):
        executor = FakeExecutor([(["a"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert executor.requests == []
        assert stream.calls == 0
        assert isinstance(stream.state, Pending)

    @pytest.mark.asyncio
    async def test_first_pull_makes_one_call(self):
        executor = FakeExecutor([(["a", "b"], "c1")])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await stream.__anext__() == "a"
        assert len(executor.requests) == 1
        assert executor.requests[0].after is None

    @pytest.mark.asyncio
    async def test_buffered_items_make_no_call(self):
        executor = FakeExecutor([(["a", "b", "c"], "c1")])
        stream = make_stream(mods_request(), mk_token(), executor)

        await stream.__anext__()
        await stream.__anext__()
        await stream.__anext__()

        assert len(executor.requests) == 1
        assert isinstance(stream.state, AwaitingNext)


class TestOrdering:

    @pytest.mark.asyncio
    async def test_pages_yield_in_order(self):
        executor = FakeExecutor([(["a", "b"], "c1"), (["c"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await drain_all(stream) == ["a", "b", "c"]
        assert not stream.failed
        assert isinstance(stream.state, Done)

    @pytest.mark.asyncio
    async def test_cursor_is_forwarded(self):
        executor = FakeExecutor([(["a"], "c1"), (["b"], "c2"), (["c"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        await drain_all(stream)

        assert [r.after for r in executor.requests] == [None, "c1", "c2"]
        assert all(r.broadcaster_id == "1234" for r in executor.requests)

    @pytest.mark.asyncio
    async def test_single_item_pages_continue(self):
        executor = FakeExecutor([(["a"], "c1"), (["b"], "c2"), (["c"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await drain_all(stream) == ["a", "b", "c"]
        assert stream.calls == 3


class TestTermination:

    @pytest.mark.asyncio
    async def test_empty_first_page_with_cursor(self):
        executor = FakeExecutor([([], "c1"), (["never"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await drain_all(stream) == []
        assert len(executor.requests) == 1
        assert stream.state == Done("empty page")

    @pytest.mark.asyncio
    async def test_empty_later_page(self):
        executor = FakeExecutor([(["a"], "c1"), ([], "c2"), (["never"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await drain_all(stream) == ["a"]
        assert len(executor.requests) == 2

    @pytest.mark.asyncio
    async def test_no_cursor_stops_without_call(self):
        executor = FakeExecutor([(["a", "b"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await drain_all(stream) == ["a", "b"]
        assert len(executor.requests) == 1
        assert stream.state == Done("no cursor")

    @pytest.mark.asyncio
    async def test_pulls_after_done_stay_done(self):
        executor = FakeExecutor([(["a"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)
        await drain_all(stream)

        for _ in range(3):
            with pytest.raises(StopAsyncIteration):
                await stream.__anext__()
        assert len(executor.requests) == 1

    @pytest.mark.asyncio
    async def test_one_call_per_page(self):
        pages = [([f"p{n}-{i}" for i in range(3)], f"c{n}") for n in range(4)]
        pages.append((["last"], None))
        executor = FakeExecutor(pages)
        stream = make_stream(mods_request(), mk_token(), executor)

        items = await drain_all(stream)

        assert len(items) == 13
        assert len(executor.requests) == 5
        assert stream.calls == 5


class TestErrors:

    @pytest.mark.asyncio
    async def test_error_on_second_page_is_raised_once(self):
        error = NetworkError("connection reset")
        executor = FakeExecutor([(["a", "b"], "c1"), error, (["c", "d", "e"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await stream.__anext__() == "a"
        assert await stream.__anext__() == "b"
        with pytest.raises(NetworkError) as exc_info:
            await stream.__anext__()
        assert exc_info.value is error

        assert stream.failed
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()
        assert len(executor.requests) == 2

    @pytest.mark.asyncio
    async def test_error_on_first_page(self):
        executor = FakeExecutor([DecodeError("invalid JSON", "https://x", 200)])
        stream = make_stream(mods_request(), mk_token(), executor)

        with pytest.raises(DecodeError):
            await stream.__anext__()
        assert isinstance(stream.state, Failed)
        assert await drain_all(stream) == []

    @pytest.mark.asyncio
    async def test_collect_propagates_error(self):
        executor = FakeExecutor([(["a"], "c1"), NetworkError("boom")])
        stream = make_stream(mods_request(), mk_token(), executor)

        with pytest.raises(NetworkError):
            await stream.collect()
        assert stream.failed

    @pytest.mark.asyncio
    async def test_extract_error_is_raised_once(self):
        executor = FakeExecutor([([{"bad": 1}], "c1"), (["never"], None)])
        stream = make_stream(mods_request(), mk_token(), executor,
                             extract=lambda data: data[0]["segments"])

        with pytest.raises(KeyError):
            await stream.__anext__()
        assert stream.failed

        for _ in range(2):
            with pytest.raises(StopAsyncIteration):
                await stream.__anext__()
        assert len(executor.requests) == 1
        assert stream.calls == 1

    @pytest.mark.asyncio
    async def test_extract_error_on_later_page(self):
        pages = iter([["a"], None])

        def extract(data):
            items = next(pages)
            if items is None:
                raise ValueError("malformed page")
            return items

        executor = FakeExecutor([(["x"], "c1"), (["y"], "c2"), (["z"], None)])
        stream = make_stream(mods_request(), mk_token(), executor, extract=extract)

        assert await stream.__anext__() == "a"
        with pytest.raises(ValueError, match="malformed page"):
            await stream.__anext__()
        assert await drain_all(stream) == []
        assert len(executor.requests) == 2

    @pytest.mark.asyncio
    async def test_continuation_without_request(self):
        class Orphaned(FakeExecutor):
            async def req_get(self, request, token):
                self.requests.append(request)
                return Response(data=["a"], pagination="c1", request=None)

        executor = Orphaned([])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await stream.__anext__() == "a"
        with pytest.raises(HelixError) as exc_info:
            await stream.__anext__()
        assert exc_info.value.code == ErrorCode.NOT_PAGINATED
        assert stream.failed

    @pytest.mark.asyncio
    async def test_failing_stream(self):
        stream = PageStream.failing(CustomError("no user_id found on token"))

        with pytest.raises(CustomError, match="no user_id found on token"):
            await stream.__anext__()
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()
        assert stream.calls == 0
        assert stream.failed

    def test_non_paginated_request_rejected(self):
        with pytest.raises(TypeError):
            make_stream(GetUsersRequest.logins("twitchdev"), mk_token(), FakeExecutor([]))


class TestAbandonAndCancel:

    @pytest.mark.asyncio
    async def test_abandoned_stream_makes_no_more_calls(self):
        executor = FakeExecutor([(["a", "b"], "c1"), (["c"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await stream.__anext__() == "a"
        del stream
        await asyncio.sleep(0)

        assert len(executor.requests) == 1
        assert len(executor.script) == 1

    @pytest.mark.asyncio
    async def test_break_out_of_loop(self):
        executor = FakeExecutor([(["a", "b"], "c1"), (["c"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        async for item in stream:
            if item == "b":
                break

        assert len(executor.requests) == 1
        assert isinstance(stream.state, AwaitingNext)

    @pytest.mark.asyncio
    async def test_cancelled_pull_keeps_state(self):
        gate = asyncio.Event()
        executor = FakeExecutor([(["a"], None)], gate=gate)
        stream = make_stream(mods_request(), mk_token(), executor)

        task = asyncio.ensure_future(stream.__anext__())
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert isinstance(stream.state, Pending)
        assert not stream.failed
        assert stream.calls == 0

        gate.set()
        assert await stream.__anext__() == "a"
        assert stream.calls == 1


class TestConsumptionHelpers:

    @pytest.mark.asyncio
    async def test_collect_with_limit_stops_fetching(self):
        executor = FakeExecutor([(["a", "b"], "c1"), (["c"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await stream.collect(limit=2) == ["a", "b"]
        assert len(executor.requests) == 1

    @pytest.mark.asyncio
    async def test_collect_zero_limit(self):
        executor = FakeExecutor([(["a"], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        assert await stream.collect(limit=0) == []
        assert executor.requests == []

    @pytest.mark.asyncio
    async def test_take_while(self):
        executor = FakeExecutor([([1, 2], "c1"), ([3, 4], "c2"), ([5], None)])
        stream = make_stream(mods_request(), mk_token(), executor)

        taken = [n async for n in stream.take_while(lambda n: n < 4)]

        assert taken == [1, 2, 3]
        assert len(executor.requests) == 2

    @pytest.mark.asyncio
    async def test_first(self):
        executor = FakeExecutor([(["a", "b"], "c1")])
        assert await make_stream(mods_request(), mk_token(), executor).first() == "a"

        empty = FakeExecutor([([], None)])
        assert await make_stream(mods_request(), mk_token(), empty).first() is None

    @pytest.mark.asyncio
    async def test_custom_extract(self):
        class Nested(FakeExecutor):
            async def req_get(self, request, token):
                response = await super().req_get(request, token)
                response.data = {"segments": response.data}
                return response

        executor = Nested([(["s1", "s2"], "c1"), (["s3"], None)])
        stream = make_stream(mods_request(), mk_token(), executor, lambda d: d["segments"])

        assert await drain_all(stream) == ["s1", "s2", "s3"]


class TestTransitions:
    """State transitions are pure functions of the previous state."""

    def test_open_page_multi(self):
        response = Response(data=["a", "b"], pagination="c1")
        state, item = open_page(response, list)
        assert item == "a"
        assert state == Draining(response, ("a", "b"), 1)

    def test_open_page_single_goes_to_awaiting(self):
        response = Response(data=["a"], pagination="c1")
        state, item = open_page(response, list)
        assert item == "a"
        assert state == AwaitingNext(response)

    def test_open_empty_page(self):
        state, _ = open_page(Response(data=[], pagination="c1"), list)
        assert state == Done("empty page")

    def test_drain_does_not_mutate(self):
        response = Response(data=["a", "b", "c"])
        before = Draining(response, ("a", "b", "c"), 1)
        after, item = drain(before)

        assert item == "b"
        assert before.position == 1
        assert after == Draining(response, ("a", "b", "c"), 2)

    def test_drain_last_item(self):
        response = Response(data=["a", "b"])
        state, item = drain(Draining(response, ("a", "b"), 1))
        assert item == "b"
        assert state == AwaitingNext(response)

    def test_drain_empty_buffer_terminates(self):
        state, _ = drain(Draining(Response(data=[]), (), 0))
        assert isinstance(state, Done)


class TestEndToEnd:
    """Streams driven through HelixClient and a scripted transport."""

    @pytest.mark.asyncio
    async def test_three_pages(self):
        http = MockHttpClient([
            page([mk_chatter(1), mk_chatter(2)], cursor="eyJiIjpudWxsLCJhIjp7Ik9mZnNldCI6Mn19"),
            page([mk_chatter(3), mk_chatter(4)], cursor="eyJiIjpudWxsLCJhIjp7Ik9mZnNldCI6NH19"),
            page([mk_chatter(5)]),
        ])
        client = HelixClient(http_client=http, config=ClientConfig())
        req = GetChattersRequest(broadcaster_id="1234", moderator_id="4321")

        chatters = await make_stream(req, mk_token(), client).collect()

        assert len(chatters) == 5
        assert all(isinstance(c, Chatter) for c in chatters)
        assert [c.user_id for c in chatters] == ["1", "2", "3", "4", "5"]
        assert len(http.calls) == 3
        assert http.urls[1].endswith("&after=eyJiIjpudWxsLCJhIjp7Ik9mZnNldCI6Mn19")

    @pytest.mark.asyncio
    async def test_decode_error_on_second_call(self):
        http = MockHttpClient([
            page([mk_chatter(1), mk_chatter(2)], cursor="c1"),
            raw_response("<html>gateway</html>"),
        ])
        client = HelixClient(http_client=http, config=ClientConfig())
        stream = make_stream(GetChattersRequest(broadcaster_id="1234", moderator_id="4321"),
                             mk_token(), client)

        seen: List[Any] = []
        while True:
            try:
                seen.append(await stream.__anext__())
            except StopAsyncIteration:
                break
            except DecodeError as e:
                seen.append(e)

        assert [c.user_id for c in seen[:2]] == ["1", "2"]
        assert isinstance(seen[2], DecodeError)
        assert len(seen) == 3
        assert len(http.calls) == 2

    @pytest.mark.asyncio
    async def test_debug_logging(self, caplog):
        caplog.set_level(logging.DEBUG, logger="helix_client.helix.pagination")
        http = MockHttpClient([page([mk_chatter(1)])])
        client = HelixClient(http_client=http, config=ClientConfig())
        stream = make_stream(GetChattersRequest(broadcaster_id="1", moderator_id="1"),
                             mk_token(), client)

        await stream.collect()

        assert "Fetched page 1 of chat/chatters" in caplog.text
        assert "no cursor" in caplog.text
        assert "test-access-token" not in caplog.text
