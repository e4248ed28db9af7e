"""FastAPI application for Spotify Cleaner.

``GET /`` sends the user to Spotify's consent screen; Spotify then redirects
back to ``GET /callback`` with an authorization code, which is exchanged and
used to empty the user's library.
"""

import sys
import time

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from loguru import logger

from spotifycleaner import __version__
from spotifycleaner.cleanup import ClientFactory, SpotifyAccountCleaner
from spotifycleaner.config import Settings, configure_logging, load_settings
from spotifycleaner.errors import ConfigurationError
from spotifycleaner.spotify.auth import build_authorize_url
from spotifycleaner.spotify.client import SpotifyUserClient

HOST = "0.0.0.0"
PORT = 8080

CLEANUP_FAILED_MESSAGE = "An error occurred while cleaning Spotify account."


def create_app(settings: Settings, client_factory: ClientFactory = SpotifyUserClient) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Shared, read-only client configuration
        client_factory: Builds a fresh Spotify client for every callback

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Spotify Cleaner",
        description="Removes all saved albums, artists, shows, tracks and playlists from a Spotify account",
        version=__version__,
    )
    cleaner = SpotifyAccountCleaner(settings, client_factory=client_factory)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        # Query strings are left out: they carry the authorization code.
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        return response

    @app.get("/")
    async def authorize(code: str | None = Query(None, description="Ignored on this route")):
        """Redirect the browser to Spotify's authorization page."""
        return RedirectResponse(build_authorize_url(settings), status_code=302)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for Kubernetes probes."""
        return {"status": "healthy", "redirect_uri": settings.redirect_uri}

    @app.get("/callback")
    def oauth_callback(code: str | None = Query(None, description="OAuth authorization code")):
        """Exchange the authorization code and clean the user's library.

        Runs as a sync route so concurrent callbacks are served from the
        threadpool while each cleanup stays strictly sequential.
        """
        logger.info("🔔 Spotify OAuth callback received")

        result = cleaner.clean(code)
        if not result.success:
            return JSONResponse(status_code=500, content={"status": CLEANUP_FAILED_MESSAGE})

        return {"status": result.summary.message}

    return app


def main() -> None:
    """Load configuration and serve the app on 0.0.0.0:8080."""
    import uvicorn

    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    logger.info(f"Starting Spotify Cleaner on {HOST}:{PORT} (redirect URI: {settings.redirect_uri})")
    uvicorn.run(create_app(settings), host=HOST, port=PORT, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
