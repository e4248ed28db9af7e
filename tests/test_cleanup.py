"""Tests for SpotifyAccountCleaner orchestration.

Uses a recording fake client, so no HTTP traffic is involved.
"""

import pytest

from spotifycleaner.cleanup import CleanupStage, CleanupSummary, LibrarySnapshot, SpotifyAccountCleaner

FETCHES = ["get_saved_albums", "get_followed_artists", "get_saved_shows", "get_saved_tracks", "get_playlists"]
REMOVALS = {"remove_saved_albums", "unfollow_artists", "remove_saved_shows", "remove_saved_tracks", "unfollow_playlist"}


def run_cleanup(settings, factory, code="the-code"):
    result = SpotifyAccountCleaner(settings, client_factory=factory).clean(code)
    return result, factory.created[0]


class TestSuccessfulCleanup:
    """Test cleanups where every upstream call succeeds."""

    def test_mixed_sizes_scenario(self, settings, make_client_factory):
        factory = make_client_factory(sizes={"albums": 3, "artists": 0, "shows": 1, "tracks": 5, "playlists": 2})

        result, client = run_cleanup(settings, factory)

        assert result.success
        assert result.stage is CleanupStage.SUMMARIZED
        assert result.summary == CleanupSummary(albums=3, artists=0, shows=1, tracks=5, playlists=2)
        assert client.calls == [
            ("exchange_code", "the-code"),
            *[(name,) for name in FETCHES],
            ("remove_saved_albums", ["album0", "album1", "album2"]),
            ("remove_saved_shows", ["show0"]),
            ("remove_saved_tracks", ["track0", "track1", "track2", "track3", "track4"]),
            ("unfollow_playlist", "playlist0"),
            ("unfollow_playlist", "playlist1"),
        ]
        assert "3 albums, 0 artists, 1 shows, 5 tracks, 2 playlists" in result.summary.message

    def test_all_empty_issues_no_removals(self, settings, make_client_factory):
        factory = make_client_factory(sizes={})

        result, client = run_cleanup(settings, factory)

        assert result.success
        assert result.summary == CleanupSummary(albums=0, artists=0, shows=0, tracks=0, playlists=0)
        assert not REMOVALS.intersection(client.call_names)
        assert client.call_names == ["exchange_code", *FETCHES]

    @pytest.mark.parametrize(
        "category,removal",
        [
            ("albums", "remove_saved_albums"),
            ("artists", "unfollow_artists"),
            ("shows", "remove_saved_shows"),
            ("tracks", "remove_saved_tracks"),
            ("playlists", "unfollow_playlist"),
        ],
    )
    def test_removal_only_for_non_empty_category(self, settings, make_client_factory, category, removal):
        factory = make_client_factory(sizes={category: 1})

        result, client = run_cleanup(settings, factory)

        assert result.success
        assert getattr(result.summary, category) == 1
        assert [name for name in client.call_names if name in REMOVALS] == [removal]

    def test_playlists_unfollowed_one_call_each(self, settings, make_client_factory):
        factory = make_client_factory(sizes={"playlists": 4})

        _, client = run_cleanup(settings, factory)

        unfollows = [call for call in client.calls if call[0] == "unfollow_playlist"]
        assert unfollows == [("unfollow_playlist", f"playlist{i}") for i in range(4)]

    def test_fetches_happen_before_any_removal(self, settings, make_client_factory):
        factory = make_client_factory(sizes={"albums": 1, "artists": 1, "shows": 1, "tracks": 1, "playlists": 1})

        _, client = run_cleanup(settings, factory)

        assert client.call_names[1:6] == FETCHES
        assert set(client.call_names[6:]) == REMOVALS

    def test_fresh_client_per_cleanup(self, settings, make_client_factory):
        factory = make_client_factory(sizes={"albums": 1})
        cleaner = SpotifyAccountCleaner(settings, client_factory=factory)

        cleaner.clean("code-a")
        cleaner.clean("code-b")

        assert len(factory.created) == 2
        assert factory.created[0] is not factory.created[1]
        assert factory.created[0].calls[0] == ("exchange_code", "code-a")
        assert factory.created[1].calls[0] == ("exchange_code", "code-b")


class TestFailedCleanup:
    """Test that any failure aborts the remaining steps."""

    def test_exchange_failure_stops_before_fetching(self, settings, make_client_factory):
        factory = make_client_factory(sizes={"albums": 2}, fail_on="exchange_code")

        result, client = run_cleanup(settings, factory)

        assert not result.success
        assert result.stage is CleanupStage.FAILED
        assert result.failed_after is CleanupStage.CODE_RECEIVED
        assert result.summary is None
        assert client.call_names == ["exchange_code"]

    def test_artist_fetch_failure_issues_no_removals(self, settings, make_client_factory):
        factory = make_client_factory(sizes={"albums": 3, "tracks": 2}, fail_on="get_followed_artists")

        result, client = run_cleanup(settings, factory)

        assert not result.success
        assert result.failed_after is CleanupStage.CREDENTIAL_EXCHANGED
        assert isinstance(result.error, RuntimeError)
        assert client.call_names == ["exchange_code", "get_saved_albums", "get_followed_artists"]

    def test_removal_failure_stops_remaining_removals(self, settings, make_client_factory):
        factory = make_client_factory(sizes={"albums": 1, "shows": 1, "tracks": 1}, fail_on="remove_saved_shows")

        result, client = run_cleanup(settings, factory)

        assert not result.success
        assert result.failed_after is CleanupStage.SNAPSHOTS_FETCHED
        assert result.summary is None
        assert "remove_saved_tracks" not in client.call_names

    def test_playlist_failure_stops_later_playlists(self, settings, make_client_factory):
        factory = make_client_factory(sizes={"playlists": 3}, fail_on="unfollow_playlist")

        result, client = run_cleanup(settings, factory)

        assert not result.success
        assert client.call_names.count("unfollow_playlist") == 1

    def test_client_factory_failure_is_contained(self, settings):
        def broken_factory(settings):
            raise RuntimeError("cannot build client")

        result = SpotifyAccountCleaner(settings, client_factory=broken_factory).clean("the-code")

        assert result.stage is CleanupStage.FAILED
        assert result.failed_after is CleanupStage.CODE_RECEIVED


class TestCleanupSummary:
    """Test CleanupSummary."""

    def test_from_empty_snapshot(self):
        summary = CleanupSummary.from_snapshot(LibrarySnapshot())
        assert summary == CleanupSummary(albums=0, artists=0, shows=0, tracks=0, playlists=0)

    def test_message(self):
        summary = CleanupSummary(albums=3, artists=0, shows=1, tracks=5, playlists=2)
        assert summary.message == (
            "Spotify account cleaned! Removed: 3 albums, 0 artists, 1 shows, 5 tracks, 2 playlists."
        )
