"""Runtime helpers for the Helix client"""

from .errors import (
    ErrorCode,
    HelixError,
    NetworkError,
    TimeoutError,
    AuthenticationError,
    RequestError,
    RateLimitedError,
    DecodeError,
    CustomError,
    ValidationError,
    error_from_response,
    ErrorHandler,
)

__all__ = [
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
]
