"""
HTTP client adapters.

The Helix executor sends every request through an HttpClient. Two adapters
are provided: AiohttpClient (native asyncio, connection pooled) and
RequestsClient (a requests.Session driven from the loop's executor).
"""

import asyncio
import functools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import aiohttp
import requests

from .config import ClientConfig
from .runtime.errors import NetworkError, TimeoutError


logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Status, headers and raw body of one HTTP exchange."""
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpClient(ABC):
    """Performs a single HTTP round trip."""

    @abstractmethod
    async def request(self, method: str, url: str, headers: Mapping[str, str],
                      body: Optional[bytes] = None) -> HttpResponse:
        """
        Send one request.

        Raises:
            NetworkError: If the request could not be completed
            TimeoutError: If the request timed out
        """

    async def close(self) -> None:
        """Release transport resources."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class AiohttpClient(HttpClient):
    """
    HttpClient backed by an aiohttp.ClientSession.

    The session is created on first use so the client can be constructed
    outside a running loop. A session passed in is never closed here.
    """

    def __init__(self, config: Optional[ClientConfig] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        self.config = config or ClientConfig()
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout)
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers={"User-Agent": self.config.user_agent},
            )
            self._owns_session = True
            logger.debug("Created aiohttp session")
        return self._session

    async def request(self, method: str, url: str, headers: Mapping[str, str],
                      body: Optional[bytes] = None) -> HttpResponse:
        session = await self._get_session()
        try:
            async with session.request(method, url, headers=dict(headers), data=body,
                                       ssl=self.config.verify_ssl) as resp:
                data = await resp.read()
                return HttpResponse(
                    status=resp.status,
                    body=data,
                    headers=dict(resp.headers),
                    url=str(resp.url),
                )
        except asyncio.TimeoutError as e:
            raise TimeoutError(f"{method} {url} timed out after {self.config.timeout}s",
                               {"uri": url}, e) from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"{method} {url} failed: {e}", {"uri": url}, e) from e

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.debug("Closed aiohttp session")
        self._session = None


class RequestsClient(HttpClient):
    """
    HttpClient backed by requests.

    Each request runs in the event loop's default executor so the calling
    coroutine suspends instead of blocking the loop.
    """

    def __init__(self, config: Optional[ClientConfig] = None,
                 session: Optional[requests.Session] = None):
        self.config = config or ClientConfig()
        self._session = session or requests.Session()
        self._owns_session = session is None
        if self._owns_session:
            self._session.headers["User-Agent"] = self.config.user_agent

    def _send(self, method: str, url: str, headers: Dict[str, str],
              body: Optional[bytes]) -> HttpResponse:
        resp = self._session.request(
            method,
            url,
            headers=headers,
            data=body,
            timeout=self.config.timeout,
            verify=self.config.verify_ssl,
        )
        return HttpResponse(
            status=resp.status_code,
            body=resp.content,
            headers=dict(resp.headers),
            url=resp.url,
        )

    async def request(self, method: str, url: str, headers: Mapping[str, str],
                      body: Optional[bytes] = None) -> HttpResponse:
        loop = asyncio.get_running_loop()
        call = functools.partial(self._send, method, url, dict(headers), body)
        try:
            return await loop.run_in_executor(None, call)
        except requests.exceptions.Timeout as e:
            raise TimeoutError(f"{method} {url} timed out after {self.config.timeout}s",
                               {"uri": url}, e) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{method} {url} failed: {e}", {"uri": url}, e) from e

    async def close(self) -> None:
        if self._owns_session:
            self._session.close()


__all__ = ["HttpResponse", "HttpClient", "AiohttpClient", "RequestsClient"]
