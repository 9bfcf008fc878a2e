"""
Token contract for Helix requests.

The client never acquires or refreshes tokens; it only reads what a token
reports and attaches it to outgoing requests.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence, Tuple


class TwitchToken(ABC):
    """A bearer token with the identity and scopes it was issued for."""

    @property
    @abstractmethod
    def access_token(self) -> str:
        """Raw bearer token."""

    @property
    @abstractmethod
    def client_id(self) -> str:
        """Client ID of the application the token belongs to."""

    @property
    def user_id(self) -> Optional[str]:
        """User ID for user tokens, None for app tokens."""
        return None

    @property
    def login(self) -> Optional[str]:
        return None

    @property
    def scopes(self) -> Optional[Sequence[str]]:
        """Granted scopes, or None when unknown."""
        return None

    def auth_headers(self) -> Dict[str, str]:
        """Headers that authorize a Helix request."""
        return {
            "Client-Id": self.client_id,
            "Authorization": f"Bearer {self.access_token}",
        }

    def missing_scopes(self, required: Sequence[str]) -> Tuple[str, ...]:
        """
        Return the required scopes this token does not hold.

        A token that does not know its scopes is assumed to hold them all.
        """
        granted = self.scopes
        if granted is None:
            return ()
        return tuple(scope for scope in required if scope not in granted)


class StaticToken(TwitchToken):
    """
    Token whose values are known up front.

    Example:
        ```python
        token = StaticToken("abc123", "my-client-id", user_id="1234",
                            scopes=("moderator:read:chatters",))
        ```
    """

    def __init__(self, access_token: str, client_id: str, user_id: Optional[str] = None,
                 login: Optional[str] = None, scopes: Optional[Sequence[str]] = None):
        self._access_token = access_token
        self._client_id = client_id
        self._user_id = user_id
        self._login = login
        self._scopes: Optional[Tuple[str, ...]] = tuple(scopes) if scopes is not None else None

    def __repr__(self) -> str:
        return f"StaticToken(client_id={self._client_id!r}, user_id={self._user_id!r})"

    @property
    def access_token(self) -> str:
        return self._access_token

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def login(self) -> Optional[str]:
        return self._login

    @property
    def scopes(self) -> Optional[Sequence[str]]:
        return self._scopes


__all__ = ["TwitchToken", "StaticToken"]
