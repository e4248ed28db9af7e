"""Spotify OAuth helpers: authorization URL and authorization-code exchange."""

import urllib.parse

import requests
from loguru import logger

from spotifycleaner.config import Settings
from spotifycleaner.errors import SpotifyAuthError

SPOTIFY_ACCOUNTS_BASE_URL = "https://accounts.spotify.com"

# Order matters: it is the order shown on Spotify's consent screen.
SPOTIFY_SCOPES = [
    "user-read-private",
    "user-follow-modify",
    "user-follow-read",
    "user-library-modify",
    "user-library-read",
    "user-read-playback-position",
    "user-top-read",
    "user-read-recently-played",
    "playlist-modify-private",
    "playlist-read-collaborative",
    "playlist-read-private",
    "playlist-modify-public",
]

DEFAULT_STATE = "hi"


def build_authorize_url(settings: Settings, scopes: list[str] | None = None, state: str = DEFAULT_STATE) -> str:
    """Build the Spotify authorization URL the user is redirected to.

    Args:
        settings: Client configuration (client id and redirect URI are used)
        scopes: Scopes to request, defaults to SPOTIFY_SCOPES
        state: Opaque state value echoed back on the callback

    Returns:
        Absolute authorization URL
    """
    params = {
        "client_id": settings.client_id,
        "response_type": "code",
        "redirect_uri": settings.redirect_uri,
        "scope": " ".join(SPOTIFY_SCOPES if scopes is None else scopes),
        "state": state,
    }
    return f"{SPOTIFY_ACCOUNTS_BASE_URL}/authorize?{urllib.parse.urlencode(params)}"


def exchange_code_for_token(settings: Settings, code: str | None) -> str:
    """Exchange an authorization code for an access token.

    Args:
        settings: Client configuration (client credentials and redirect URI)
        code: Authorization code from the callback query string

    Returns:
        Access token

    Raises:
        SpotifyAuthError: If the code is missing or Spotify rejects the exchange
    """
    if not code:
        raise SpotifyAuthError(400, "Missing authorization code")

    logger.info("Exchanging Spotify authorization code for access token")

    response = requests.post(
        f"{SPOTIFY_ACCOUNTS_BASE_URL}/api/token",
        data={
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": settings.redirect_uri,
        },
        auth=(settings.client_id, settings.client_secret),
        headers={"Accept": "application/json"},
        timeout=30,
    )

    if response.status_code != 200:
        raise SpotifyAuthError(response.status_code, f"Token exchange failed: {response.text}")

    token_data = response.json()
    access_token = token_data.get("access_token")
    if not access_token:
        raise SpotifyAuthError(response.status_code, "No access token in response")

    logger.info(f"✅ Exchanged code for Spotify token (scopes: {token_data.get('scope', 'default')})")
    return access_token
