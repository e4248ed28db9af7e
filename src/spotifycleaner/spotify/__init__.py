"""Spotify Web API integration: authorization URL, token exchange and library client."""

from spotifycleaner.spotify.auth import SPOTIFY_SCOPES, build_authorize_url
from spotifycleaner.spotify.client import SpotifyUserClient

__all__ = [
    "SPOTIFY_SCOPES",
    "SpotifyUserClient",
    "build_authorize_url",
]
