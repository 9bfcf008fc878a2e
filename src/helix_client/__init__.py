"""
Helix Python Client

Typed async client for the Twitch Helix API. Paginated endpoints are exposed
as lazy async streams that fetch one page at a time as they are consumed.
"""

# Configuration and transport
from .config import ClientConfig, DEFAULT_BASE_URL
from .auth import TwitchToken, StaticToken
from .http import HttpClient, HttpResponse, AiohttpClient, RequestsClient

# Errors
from .runtime.errors import *

# Helix API
from .helix import (
    HelixClient, HelixRequest, PaginatedRequest, HelixBody, EmptyBody, NoContent,
    Response, PageStream, make_stream, endpoints,
)

__version__ = "0.4.0"
__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "TwitchToken",
    "StaticToken",
    "HttpClient",
    "HttpResponse",
    "AiohttpClient",
    "RequestsClient",
    "ErrorCode",
    "HelixError",
    "NetworkError",
    "TimeoutError",
    "AuthenticationError",
    "RequestError",
    "RateLimitedError",
    "DecodeError",
    "CustomError",
    "ValidationError",
    "error_from_response",
    "ErrorHandler",
    "HelixClient",
    "HelixRequest",
    "PaginatedRequest",
    "HelixBody",
    "EmptyBody",
    "NoContent",
    "Response",
    "PageStream",
    "make_stream",
    "endpoints",
]
