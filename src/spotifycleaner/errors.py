"""Exceptions raised by Spotify Cleaner."""


class ConfigurationError(RuntimeError):
    """Raised when required environment configuration is missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"SPOTIFY_CLIENT_ID, SPOTIFY_CLIENT_SECRET, and BASE_URL must be set in .env (missing: {', '.join(missing)})"
        )


class SpotifyAPIError(Exception):
    """Raised when the Spotify Web API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Spotify API error {status_code}: {message}")


class SpotifyAuthError(SpotifyAPIError):
    """Raised when the authorization code cannot be exchanged for a token."""
