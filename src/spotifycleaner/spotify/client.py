"""Request-scoped Spotify Web API client.

A ``SpotifyUserClient`` is created for exactly one callback and carries that
user's access token. Instances are never shared between requests.
"""

from typing import Any

import requests
from loguru import logger

from spotifycleaner.config import Settings
from spotifycleaner.errors import SpotifyAPIError, SpotifyAuthError
from spotifycleaner.spotify.auth import exchange_code_for_token
from spotifycleaner.spotify.models import FollowedArtist, Playlist, SavedAlbum, SavedShow, SavedTrack

SPOTIFY_API_BASE_URL = "https://api.spotify.com/v1"


class SpotifyUserClient:
    """Spotify client bound to a single user's access token."""

    def __init__(self, settings: Settings, access_token: str | None = None, api_base_url: str = SPOTIFY_API_BASE_URL):
        """Initialize the client.

        Args:
            settings: Shared client configuration
            access_token: Access token, if already known (normally set by exchange_code)
            api_base_url: Spotify Web API base URL
        """
        self.settings = settings
        self.access_token = access_token
        self._api_base_url = api_base_url

    def exchange_code(self, code: str | None) -> None:
        """Exchange the authorization code and attach the token to this client."""
        self.access_token = exchange_code_for_token(self.settings, code)

    @property
    def _headers(self) -> dict[str, str]:
        if not self.access_token:
            raise SpotifyAuthError(401, "No access token; exchange an authorization code first")
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._api_base_url}{path}"
        logger.debug(f"GET {path}")
        response = requests.get(url, headers=self._headers, params=params, timeout=30)
        if response.status_code != 200:
            raise SpotifyAPIError(response.status_code, response.text)
        return response.json()

    def _delete(self, path: str, params: dict[str, Any] | None = None) -> None:
        url = f"{self._api_base_url}{path}"
        logger.debug(f"DELETE {path}")
        response = requests.delete(url, headers=self._headers, params=params, timeout=30)
        if not 200 <= response.status_code < 300:
            raise SpotifyAPIError(response.status_code, response.text)

    # Fetches (first page only)

    def get_saved_albums(self) -> list[SavedAlbum]:
        data = self._get("/me/albums")
        return [SavedAlbum.model_validate(item) for item in data.get("items", [])]

    def get_followed_artists(self) -> list[FollowedArtist]:
        # Followed artists are wrapped in an extra "artists" envelope.
        data = self._get("/me/following", params={"type": "artist"})
        return [FollowedArtist.model_validate(item) for item in data.get("artists", {}).get("items", [])]

    def get_saved_shows(self) -> list[SavedShow]:
        data = self._get("/me/shows")
        return [SavedShow.model_validate(item) for item in data.get("items", [])]

    def get_saved_tracks(self) -> list[SavedTrack]:
        data = self._get("/me/tracks")
        return [SavedTrack.model_validate(item) for item in data.get("items", [])]

    def get_playlists(self) -> list[Playlist]:
        data = self._get("/me/playlists")
        return [Playlist.model_validate(item) for item in data.get("items", [])]

    # Removals

    def remove_saved_albums(self, ids: list[str]) -> None:
        self._delete("/me/albums", params={"ids": ",".join(ids)})

    def unfollow_artists(self, ids: list[str]) -> None:
        self._delete("/me/following", params={"type": "artist", "ids": ",".join(ids)})

    def remove_saved_shows(self, ids: list[str]) -> None:
        self._delete("/me/shows", params={"ids": ",".join(ids)})

    def remove_saved_tracks(self, ids: list[str]) -> None:
        self._delete("/me/tracks", params={"ids": ",".join(ids)})

    def unfollow_playlist(self, playlist_id: str) -> None:
        """Unfollow one playlist. Spotify has no bulk variant of this call."""
        self._delete(f"/playlists/{playlist_id}/followers")
