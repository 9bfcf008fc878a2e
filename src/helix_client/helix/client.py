"""
Helix API Client

This module provides the single-call executor for the Helix API: it turns a
request model into an HTTP call, checks the token's scopes, maps failures to
HelixError subclasses and decodes the payload into a Response envelope.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional

import pydantic

from ..auth import TwitchToken
from ..config import ClientConfig
from ..http import AiohttpClient, HttpClient, HttpResponse
from ..runtime.errors import (
    AuthenticationError, DecodeError, ErrorCode, ValidationError, error_from_response,
)
from .client_ext import HelixClientExt
from .request import BodyType, HelixRequest, encode_body
from .response import Response


logger = logging.getLogger(__name__)

_ENVELOPE_KEYS = ("data", "pagination", "total")


class HelixClient(HelixClientExt):
    """
    Helix API client.

    Provides:
    - Typed request execution (``req_get``, ``req_post``, ``req_put``,
      ``req_patch``, ``req_delete``)
    - Scope checks before any network traffic
    - Structured errors with status, URI and body snippet
    - Paginated endpoints as lazy async streams (see ``make_stream``)

    Example:
        ```python
        async with HelixClient() as client:
            token = StaticToken("abc123", "my-client-id")
            user = await client.get_user_from_login("twitchdev", token)
            async for chatter in client.get_chatters("1234", "4321", token, batch_size=1000):
                print(chatter.user_login)
        ```
    """

    def __init__(self, http_client: Optional[HttpClient] = None,
                 config: Optional[ClientConfig] = None):
        """
        Initialize the Helix client.

        Args:
            http_client: Transport used for every call (default: AiohttpClient)
            config: Client configuration (default: ClientConfig())
        """
        self.config = config or ClientConfig()
        self.config.apply_logging()
        self.http_client = http_client or AiohttpClient(self.config)
        self._owns_http_client = http_client is None

    async def close(self) -> None:
        """Close the HTTP client if owned by this client."""
        if self._owns_http_client:
            await self.http_client.close()

    async def __aenter__(self) -> HelixClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # Typed request methods
    # =========================================================================

    async def req_get(self, request: HelixRequest, token: TwitchToken) -> Response:
        """Execute a GET endpoint."""
        return await self._req("GET", request, None, token)

    async def req_delete(self, request: HelixRequest, token: TwitchToken) -> Response:
        """Execute a DELETE endpoint."""
        return await self._req("DELETE", request, None, token)

    async def req_post(self, request: HelixRequest, body: BodyType, token: TwitchToken) -> Response:
        """Execute a POST endpoint with ``body``."""
        return await self._req("POST", request, body, token)

    async def req_put(self, request: HelixRequest, body: BodyType, token: TwitchToken) -> Response:
        """Execute a PUT endpoint with ``body``."""
        return await self._req("PUT", request, body, token)

    async def req_patch(self, request: HelixRequest, body: BodyType, token: TwitchToken) -> Response:
        """Execute a PATCH endpoint with ``body``."""
        return await self._req("PATCH", request, body, token)

    async def _req(self, method: str, request: HelixRequest, body: BodyType,
                   token: TwitchToken) -> Response:
        if request.METHOD != method:
            raise ValidationError(
                f"{type(request).__name__} is a {request.METHOD} endpoint, not {method}",
                {"path": request.PATH},
            )
        return await self.request(request, body, token)

    async def request(self, request: HelixRequest, body: BodyType, token: TwitchToken) -> Response:
        """
        Perform one Helix call.

        Args:
            request: Endpoint request
            body: Request body, a sequence of bodies, or None
            token: Token authorizing the call

        Returns:
            Decoded Response envelope

        Raises:
            AuthenticationError: Missing scope, or the server rejected the token
            NetworkError: Transport failure or timeout
            RequestError: Non-success status reported by the server
            DecodeError: Body is not valid JSON or does not match the schema
        """
        missing = token.missing_scopes(request.SCOPE)
        if missing:
            raise AuthenticationError(
                f"token is missing required scopes: {', '.join(missing)}",
                ErrorCode.MISSING_SCOPE,
                {"path": request.PATH, "missing": list(missing)},
            )

        uri = request.get_uri(self.config.base_url)
        headers: Dict[str, str] = dict(token.auth_headers())
        headers["User-Agent"] = self.config.user_agent
        payload = encode_body(body)
        if payload is not None:
            headers["Content-Type"] = "application/json"

        logger.debug(f"{request.METHOD} {uri}")
        http_response = await self.http_client.request(request.METHOD, uri, headers, payload)
        logger.debug(f"{request.METHOD} {uri} -> {http_response.status}")

        return self.parse_response(request, uri, http_response)

    # =========================================================================
    # Response decoding
    # =========================================================================

    @staticmethod
    def parse_response(request: HelixRequest, uri: str, http_response: HttpResponse) -> Response:
        """
        Decode an HTTP response for ``request`` into a Response envelope.

        Raises:
            HelixError: Mapped from the status for failures, DecodeError for
                bodies that cannot be decoded
        """
        status = http_response.status
        raw = http_response.body

        if not http_response.ok:
            raise error_from_response(status, raw, uri, http_response.headers)

        text = raw.decode("utf-8", errors="replace") if raw else ""

        if request.NO_CONTENT is not None:
            if status == 204 or not text.strip():
                return Response(data=request.NO_CONTENT, request=request)
            raise DecodeError("unexpected status", uri, status, text)

        if not text.strip():
            raise DecodeError("empty response body", uri, status, text)

        try:
            payload = json.loads(text)
        except ValueError as e:
            raise DecodeError(f"invalid JSON: {e}", uri, status, text, cause=e) from e
        if not isinstance(payload, dict):
            raise DecodeError("response body is not a JSON object", uri, status, text)

        try:
            data = request.parse_data(request.build_data(payload))
        except pydantic.ValidationError as e:
            raise DecodeError(
                f"response does not match {type(request).__name__}: {e.error_count()} errors",
                uri, status, text, {"errors": e.errors(include_url=False)}, e,
            ) from e

        return Response(
            data=data,
            pagination=_cursor(payload.get("pagination")),
            request=request,
            total=payload.get("total") if isinstance(payload.get("total"), int) else None,
            other={k: v for k, v in payload.items() if k not in _ENVELOPE_KEYS},
        )


def _cursor(pagination: Any) -> Optional[str]:
    """Cursor from a ``pagination`` field; ``{}``, ``""`` and null mean none."""
    if isinstance(pagination, dict):
        pagination = pagination.get("cursor")
    if isinstance(pagination, str) and pagination:
        return pagination
    return None


__all__ = ["HelixClient"]
