"""
Shared field types for Helix models.

Twitch identifiers are opaque strings; the aliases exist for readability in
signatures. Some endpoints send an empty string where a value is absent,
``EmptyAsNone`` normalizes those to None.
"""

from typing import Annotated, Optional

from pydantic import BeforeValidator


UserId = str
UserName = str
DisplayName = str
CategoryId = str
EmoteId = str
EmoteSetId = str
MsgId = str
TagId = str
Timestamp = str


def _empty_as_none(value):
    if value == "":
        return None
    return value


EmptyAsNone = BeforeValidator(_empty_as_none)

OptionalTimestamp = Annotated[Optional[Timestamp], EmptyAsNone]
OptionalString = Annotated[Optional[str], EmptyAsNone]


__all__ = [
    "UserId",
    "UserName",
    "DisplayName",
    "CategoryId",
    "EmoteId",
    "EmoteSetId",
    "MsgId",
    "TagId",
    "Timestamp",
    "EmptyAsNone",
    "OptionalTimestamp",
    "OptionalString",
]
