"""Pydantic records for the items of each saved-library category.

Every category nests its identifier differently, so each record exposes its
own ``removal_id`` rather than sharing a generic extractor.
"""

from pydantic import BaseModel, Field


class AlbumRef(BaseModel):
    """Album object embedded in a saved-album entry."""

    id: str = Field(..., description="Spotify album ID")
    name: str | None = Field(None, description="Album name")


class ShowRef(BaseModel):
    """Show object embedded in a saved-show entry."""

    id: str = Field(..., description="Spotify show ID")
    name: str | None = Field(None, description="Show name")


class TrackRef(BaseModel):
    """Track object embedded in a saved-track entry."""

    id: str = Field(..., description="Spotify track ID")
    name: str | None = Field(None, description="Track name")


class SavedAlbum(BaseModel):
    """Entry from ``GET /me/albums``."""

    added_at: str | None = Field(None, description="When the album was saved")
    album: AlbumRef

    @property
    def removal_id(self) -> str:
        return self.album.id


class FollowedArtist(BaseModel):
    """Entry from ``GET /me/following?type=artist``."""

    id: str = Field(..., description="Spotify artist ID")
    name: str | None = Field(None, description="Artist name")

    @property
    def removal_id(self) -> str:
        return self.id


class SavedShow(BaseModel):
    """Entry from ``GET /me/shows``."""

    added_at: str | None = Field(None, description="When the show was saved")
    show: ShowRef

    @property
    def removal_id(self) -> str:
        return self.show.id


class SavedTrack(BaseModel):
    """Entry from ``GET /me/tracks``."""

    added_at: str | None = Field(None, description="When the track was saved")
    track: TrackRef

    @property
    def removal_id(self) -> str:
        return self.track.id


class Playlist(BaseModel):
    """Entry from ``GET /me/playlists`` (owned or followed)."""

    id: str = Field(..., description="Spotify playlist ID")
    name: str | None = Field(None, description="Playlist name")

    @property
    def removal_id(self) -> str:
        return self.id
