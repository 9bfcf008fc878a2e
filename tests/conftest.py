"""
Shared fixtures: a scripted transport, a client bound to it and tokens.
"""

import sys
from pathlib import Path

import pytest

# Make tests/helpers importable from every test module
TESTS_DIR = Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import MockHttpClient, mk_token

from helix_client import ClientConfig, HelixClient


@pytest.fixture
def http():
    """Scripted HTTP transport with no replies queued."""
    return MockHttpClient()


@pytest.fixture
def client(http):
    """HelixClient sending through the scripted transport."""
    return HelixClient(http_client=http, config=ClientConfig())


@pytest.fixture
def token():
    """User token without scope information."""
    return mk_token()


@pytest.fixture
def app_token():
    """App token: no user id."""
    return mk_token(user_id=None)
