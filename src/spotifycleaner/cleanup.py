"""Account cleanup orchestration.

A cleanup runs as an ordered list of fallible steps over a per-request
``CleanupRun``. The runner stops at the first step that raises and turns the
error into a failed ``CleanupResult``. No partial summary is ever produced.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from loguru import logger

from spotifycleaner.config import Settings
from spotifycleaner.spotify.client import SpotifyUserClient
from spotifycleaner.spotify.models import FollowedArtist, Playlist, SavedAlbum, SavedShow, SavedTrack

ClientFactory = Callable[[Settings], SpotifyUserClient]


class CleanupStage(StrEnum):
    """Per-request cleanup states. SUMMARIZED and FAILED are terminal."""

    IDLE = "idle"
    CODE_RECEIVED = "code_received"
    CREDENTIAL_EXCHANGED = "credential_exchanged"
    SNAPSHOTS_FETCHED = "snapshots_fetched"
    REMOVALS_ISSUED = "removals_issued"
    SUMMARIZED = "summarized"
    FAILED = "failed"


@dataclass(frozen=True)
class LibrarySnapshot:
    """The five saved collections, as fetched before any removal."""

    albums: list[SavedAlbum] = field(default_factory=list)
    artists: list[FollowedArtist] = field(default_factory=list)
    shows: list[SavedShow] = field(default_factory=list)
    tracks: list[SavedTrack] = field(default_factory=list)
    playlists: list[Playlist] = field(default_factory=list)


@dataclass(frozen=True)
class CleanupSummary:
    """Number of items found (and targeted for removal) per category."""

    albums: int
    artists: int
    shows: int
    tracks: int
    playlists: int

    @classmethod
    def from_snapshot(cls, snapshot: LibrarySnapshot) -> "CleanupSummary":
        return cls(
            albums=len(snapshot.albums),
            artists=len(snapshot.artists),
            shows=len(snapshot.shows),
            tracks=len(snapshot.tracks),
            playlists=len(snapshot.playlists),
        )

    @property
    def message(self) -> str:
        return (
            f"Spotify account cleaned! Removed: {self.albums} albums, {self.artists} artists, "
            f"{self.shows} shows, {self.tracks} tracks, {self.playlists} playlists."
        )


@dataclass
class CleanupRun:
    """Mutable state of one cleanup, owned by the handling request."""

    code: str | None
    stage: CleanupStage = CleanupStage.IDLE
    client: SpotifyUserClient | None = None
    snapshot: LibrarySnapshot | None = None
    summary: CleanupSummary | None = None


@dataclass(frozen=True)
class CleanupResult:
    """Terminal outcome of a cleanup."""

    stage: CleanupStage
    summary: CleanupSummary | None = None
    failed_after: CleanupStage | None = None
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.stage is CleanupStage.SUMMARIZED


class SpotifyAccountCleaner:
    """Removes every saved item from a Spotify account.

    Each call to ``clean`` builds its own client through ``client_factory``, so
    one user's access token is never visible to another request.
    """

    def __init__(self, settings: Settings, client_factory: ClientFactory = SpotifyUserClient):
        """Initialize the cleaner.

        Args:
            settings: Shared client configuration
            client_factory: Builds a fresh per-request client from settings
        """
        self.settings = settings
        self._client_factory = client_factory

    def clean(self, code: str | None) -> CleanupResult:
        """Run the full cleanup for one authorization code.

        Args:
            code: Authorization code from the OAuth callback

        Returns:
            CleanupResult, either SUMMARIZED with a summary or FAILED with the error
        """
        run = CleanupRun(code=code, stage=CleanupStage.CODE_RECEIVED)
        steps: list[tuple[CleanupStage, Callable[[CleanupRun], None]]] = [
            (CleanupStage.CREDENTIAL_EXCHANGED, self._exchange_code),
            (CleanupStage.SNAPSHOTS_FETCHED, self._fetch_snapshots),
            (CleanupStage.REMOVALS_ISSUED, self._issue_removals),
            (CleanupStage.SUMMARIZED, self._summarize),
        ]

        for next_stage, step in steps:
            try:
                step(run)
            except Exception as e:
                logger.exception(f"Spotify cleanup failed after stage '{run.stage}': {e}")
                return CleanupResult(stage=CleanupStage.FAILED, failed_after=run.stage, error=e)
            run.stage = next_stage
            logger.debug(f"Cleanup reached stage '{next_stage}'")

        logger.info(f"🧹 {run.summary.message}")
        return CleanupResult(stage=CleanupStage.SUMMARIZED, summary=run.summary)

    def _exchange_code(self, run: CleanupRun) -> None:
        run.client = self._client_factory(self.settings)
        run.client.exchange_code(run.code)

    def _fetch_snapshots(self, run: CleanupRun) -> None:
        client = run.client
        run.snapshot = LibrarySnapshot(
            albums=client.get_saved_albums(),
            artists=client.get_followed_artists(),
            shows=client.get_saved_shows(),
            tracks=client.get_saved_tracks(),
            playlists=client.get_playlists(),
        )
        logger.info(f"Fetched library snapshot: {CleanupSummary.from_snapshot(run.snapshot)}")

    def _issue_removals(self, run: CleanupRun) -> None:
        client = run.client
        snapshot = run.snapshot

        if snapshot.albums:
            client.remove_saved_albums([album.removal_id for album in snapshot.albums])
        if snapshot.artists:
            client.unfollow_artists([artist.removal_id for artist in snapshot.artists])
        if snapshot.shows:
            client.remove_saved_shows([show.removal_id for show in snapshot.shows])
        if snapshot.tracks:
            client.remove_saved_tracks([track.removal_id for track in snapshot.tracks])
        for playlist in snapshot.playlists:
            client.unfollow_playlist(playlist.removal_id)

    def _summarize(self, run: CleanupRun) -> None:
        run.summary = CleanupSummary.from_snapshot(run.snapshot)
