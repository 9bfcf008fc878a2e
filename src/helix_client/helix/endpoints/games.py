"""
Games endpoints.

- Get Games (``GET games``), up to 100 ids or names per call
"""

from __future__ import annotations
from typing import Any, ClassVar, List

from pydantic import BaseModel, Field

from ...types import CategoryId, OptionalString
from ..request import HelixRequest


MAX_GAME_IDS = 100


class Game(BaseModel):
    id: CategoryId
    name: str
    box_art_url: str = ""
    igdb_id: OptionalString = None


class GetGamesRequest(HelixRequest):
    PATH: ClassVar[str] = "games"
    RESPONSE: ClassVar[Any] = List[Game]

    id: List[CategoryId] = Field(default_factory=list)
    name: List[str] = Field(default_factory=list)


__all__ = ["MAX_GAME_IDS", "Game", "GetGamesRequest"]
