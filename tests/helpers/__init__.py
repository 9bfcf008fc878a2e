from .mock_http import (
    MockHttpClient, RecordedCall, json_response, raw_response, page,
    mk_token, mk_chatter, mk_moderator, mk_user,
)

__all__ = [
    "MockHttpClient",
    "RecordedCall",
    "json_response",
    "raw_response",
    "page",
    "mk_token",
    "mk_chatter",
    "mk_moderator",
    "mk_user",
]
