"""
Helix endpoint definitions, one module per API category.
"""

from . import channels, chat, eventsub, games, moderation, raids, schedule, search, streams, subscriptions, users, whispers

__all__ = [
    "channels",
    "chat",
    "eventsub",
    "games",
    "moderation",
    "raids",
    "schedule",
    "search",
    "streams",
    "subscriptions",
    "users",
    "whispers",
]
