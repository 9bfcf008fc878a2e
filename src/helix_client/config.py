"""
Client configuration.

Holds endpoint and transport settings shared by the executor and the
HTTP client adapters.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_BASE_URL = "https://api.twitch.tv/helix"

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class ClientConfig:
    """Configuration for the Helix client."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    debug: bool = False
    verify_ssl: bool = True
    user_agent: str = "helix-client-python/0.4.0"

    def __post_init__(self):
        self.base_url = self.base_url.rstrip("/")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ClientConfig:
        """
        Build a configuration from environment variables.

        Reads ``HELIX_BASE_URL``, ``HELIX_TIMEOUT`` and ``HELIX_DEBUG``;
        unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        config = cls(
            base_url=env.get("HELIX_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(env.get("HELIX_TIMEOUT", 30.0)),
            debug=env.get("HELIX_DEBUG", "").lower() in _TRUTHY,
        )
        return config

    def apply_logging(self) -> None:
        """Raise the package logger to DEBUG when debug is enabled."""
        if self.debug:
            logging.getLogger("helix_client").setLevel(logging.DEBUG)
