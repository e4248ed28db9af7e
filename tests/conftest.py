"""Root conftest.py for Spotify Cleaner tests.

Provides settings and client-factory fixtures available to all test modules.
"""

import pytest
from payloads import FakeSpotifyClient

from spotifycleaner.config import Settings


@pytest.fixture
def settings():
    """Settings pointing at a local base URL."""
    return Settings(client_id="test-client-id", client_secret="test-client-secret", base_url="http://localhost:8080")


@pytest.fixture
def make_client_factory():
    """Return a builder for client factories that remember every client they create."""

    def _make(sizes=None, fail_on=None):
        created: list[FakeSpotifyClient] = []

        def factory(settings):
            client = FakeSpotifyClient(settings, sizes=sizes, fail_on=fail_on)
            created.append(client)
            return client

        factory.created = created
        return factory

    return _make
