"""
Helix Error Model

This module provides the error handling framework for the Helix client.
Every failure surfaced by the executor, the transports and the pagination
adapter is an instance of HelixError.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Mapping
from enum import IntEnum
import json


# Longest body excerpt kept on an error
BODY_SNIPPET_LIMIT = 512


class ErrorCode(IntEnum):
    """Helix client error codes."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    CUSTOM = 3
    INVALID_ARGUMENT = 4

    # Request errors (100-199)
    BAD_REQUEST = 100
    NOT_FOUND = 101
    CONFLICT = 102
    UNPROCESSABLE = 103
    SERVER_ERROR = 104

    # Network errors (200-299)
    NETWORK_ERROR = 200
    CONNECTION_FAILED = 201
    TIMEOUT = 202
    RATE_LIMITED = 203
    SERVICE_UNAVAILABLE = 204

    # Authentication errors (300-399)
    UNAUTHORIZED = 300
    FORBIDDEN = 301
    MISSING_SCOPE = 302

    # Encoding errors (400-499)
    DECODE_ERROR = 400
    ENCODE_ERROR = 401
    NOT_PAGINATED = 402


class HelixError(Exception):
    """
    Base class for all Helix client errors.

    Provides structured error information so callers can inspect or log
    the failure without parsing messages.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a Helix error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class NetworkError(HelixError):
    """The request could not be completed by the transport."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NETWORK_ERROR, details, cause)


class TimeoutError(NetworkError):
    """Request timeouts."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, details, cause)
        self.code = ErrorCode.TIMEOUT


class AuthenticationError(HelixError):
    """Token is invalid, expired, or lacks a required scope."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNAUTHORIZED,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class RequestError(HelixError):
    """
    Server answered with a non-success status.

    Keeps the status, Twitch's ``error``/``message`` fields, the URI and a
    snippet of the body.
    """

    def __init__(self, message: str, status: int, uri: str,
                 error: Optional[str] = None, body: str = "",
                 code: ErrorCode = ErrorCode.BAD_REQUEST,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)
        self.status = status
        self.uri = uri
        self.error = error
        self.body = body[:BODY_SNIPPET_LIMIT]

    def __str__(self) -> str:
        return f"{super().__str__()} | {self.status} {self.uri}"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update({"status": self.status, "uri": self.uri})
        if self.error:
            result["error"] = self.error
        return result


class RateLimitedError(RequestError):
    """Rate limit bucket exhausted (HTTP 429)."""

    def __init__(self, message: str, status: int, uri: str,
                 error: Optional[str] = None, body: str = "",
                 reset_at: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status, uri, error, body, ErrorCode.RATE_LIMITED, details)
        self.reset_at = reset_at


class DecodeError(HelixError):
    """Response body is not valid JSON or does not match the expected schema."""

    def __init__(self, message: str, uri: str = "", status: Optional[int] = None, body: str = "",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.DECODE_ERROR, details, cause)
        self.uri = uri
        self.status = status
        self.body = body[:BODY_SNIPPET_LIMIT]


class CustomError(HelixError):
    """Precondition failed before any request was sent."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CUSTOM, details)


class ValidationError(HelixError):
    """Invalid argument supplied to a request or helper."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, details, cause)


_STATUS_CODES = {
    400: ErrorCode.BAD_REQUEST,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.UNPROCESSABLE,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


def error_from_response(status: int, body: bytes, uri: str,
                        headers: Optional[Mapping[str, str]] = None) -> HelixError:
    """
    Create an appropriate error from a failed HTTP response.

    Twitch reports failures as ``{"error": "...", "status": 400, "message": "..."}``.
    Bodies that are not JSON are kept verbatim.

    Args:
        status: HTTP status code
        body: Raw response body
        uri: Request URI
        headers: Response headers

    Returns:
        Appropriate error instance
    """
    text = body.decode("utf-8", errors="replace") if body else ""
    error_name: Optional[str] = None
    message = text or f"HTTP {status}"

    try:
        payload = json.loads(text) if text else None
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        error_name = payload.get("error")
        message = payload.get("message") or error_name or message

    details = {"status": status, "uri": uri}

    if status == 401:
        return AuthenticationError(message, ErrorCode.UNAUTHORIZED, details)
    if status == 403:
        return AuthenticationError(message, ErrorCode.FORBIDDEN, details)
    if status == 429:
        reset = (headers or {}).get("Ratelimit-Reset")
        return RateLimitedError(
            message, status, uri, error_name, text,
            reset_at=int(reset) if reset and reset.isdigit() else None,
        )
    if status >= 500:
        code = _STATUS_CODES.get(status, ErrorCode.SERVER_ERROR)
    else:
        code = _STATUS_CODES.get(status, ErrorCode.BAD_REQUEST)
    return RequestError(message, status, uri, error_name, text, code)


class ErrorHandler:
    """
    Utility class for categorizing errors.

    The pagination adapter never retries; callers that want to can use
    this classification.
    """

    @staticmethod
    def is_retryable(error: Exception) -> bool:
        """
        Check if an error is worth retrying.

        Args:
            error: Exception to check

        Returns:
            True if the error should be retried
        """
        if isinstance(error, HelixError):
            if error.code in (ErrorCode.NETWORK_ERROR, ErrorCode.CONNECTION_FAILED,
                              ErrorCode.TIMEOUT, ErrorCode.SERVICE_UNAVAILABLE,
                              ErrorCode.RATE_LIMITED, ErrorCode.SERVER_ERROR):
                return True
            return False
        return False

    @staticmethod
    def is_auth_failure(error: Exception) -> bool:
        """Check if refreshing or replacing the token could fix the error."""
        return isinstance(error, AuthenticationError)


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
