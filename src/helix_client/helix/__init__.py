"""
Helix API: request models, the single-call executor and paginated streams.
"""

from .request import (
    NoContent, HelixRequest, PaginatedRequest, SingleItemRequest,
    HelixBody, EmptyBody, BodyType, encode_body,
)
from .response import Response
from .pagination import PageStream, make_stream
from .client_ext import HelixClientExt
from .client import HelixClient
from . import endpoints

__all__ = [
    "NoContent",
    "HelixRequest",
    "PaginatedRequest",
    "SingleItemRequest",
    "HelixBody",
    "EmptyBody",
    "BodyType",
    "encode_body",
    "Response",
    "PageStream",
    "make_stream",
    "HelixClientExt",
    "HelixClient",
    "endpoints",
]
