"""
Mock HTTP transport and fixtures for testing.

MockHttpClient replays scripted HttpResponses (or raises scripted errors)
and records every request it receives.
"""

from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from helix_client.auth import StaticToken
from helix_client.http import HttpClient, HttpResponse


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[bytes]

    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


Scripted = Union[HttpResponse, Exception]


class MockHttpClient(HttpClient):
    """
    Mock transport with a queue of scripted replies.

    Running out of replies fails the test with an AssertionError, so tests
    also check that no unexpected request was made.
    """

    def __init__(self, replies: Optional[Sequence[Scripted]] = None):
        self.replies: List[Scripted] = list(replies or [])
        self.calls: List[RecordedCall] = []
        self.closed = False

    def queue(self, *replies: Scripted) -> MockHttpClient:
        self.replies.extend(replies)
        return self

    def queue_json(self, payload: Any, status: int = 200,
                   headers: Optional[Dict[str, str]] = None) -> MockHttpClient:
        return self.queue(json_response(payload, status, headers))

    @property
    def urls(self) -> List[str]:
        return [call.url for call in self.calls]

    async def request(self, method: str, url: str, headers: Mapping[str, str],
                      body: Optional[bytes] = None) -> HttpResponse:
        self.calls.append(RecordedCall(method, url, dict(headers), body))
        if not self.replies:
            raise AssertionError(f"Unexpected request: {method} {url}")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        reply.url = reply.url or url
        return reply

    async def close(self) -> None:
        self.closed = True


def json_response(payload: Any, status: int = 200,
                  headers: Optional[Dict[str, str]] = None) -> HttpResponse:
    """HttpResponse with ``payload`` serialized as its JSON body."""
    return HttpResponse(status=status, body=json.dumps(payload).encode("utf-8"),
                        headers=headers or {"Content-Type": "application/json"})


def raw_response(body: Union[str, bytes], status: int = 200) -> HttpResponse:
    if isinstance(body, str):
        body = body.encode("utf-8")
    return HttpResponse(status=status, body=body)


def page(items: Sequence[Any], cursor: Optional[str] = None, **extra: Any) -> HttpResponse:
    """One Helix page: ``data`` plus a pagination cursor when given."""
    payload: Dict[str, Any] = {"data": list(items), "pagination": {"cursor": cursor} if cursor else {}}
    payload.update(extra)
    return json_response(payload)


def mk_token(user_id: Optional[str] = "1234", scopes: Optional[Sequence[str]] = None) -> StaticToken:
    return StaticToken("test-access-token", "test-client-id", user_id=user_id,
                       login="testuser" if user_id else None, scopes=scopes)


def mk_chatter(n: int) -> Dict[str, str]:
    return {"user_id": str(n), "user_login": f"user{n}", "user_name": f"User{n}"}


def mk_moderator(n: int) -> Dict[str, str]:
    return {"user_id": str(n), "user_login": f"mod{n}", "user_name": f"Mod{n}"}


def mk_user(user_id: str, login: str) -> Dict[str, Any]:
    return {
        "id": user_id,
        "login": login,
        "display_name": login.capitalize(),
        "type": "",
        "broadcaster_type": "partner",
        "description": "",
        "profile_image_url": "https://static-cdn.jtvnw.net/p.png",
        "offline_image_url": "",
        "view_count": 0,
        "created_at": "2016-12-14T20:32:28Z",
    }
