"""Spotify Cleaner.

A small OAuth web service that signs a user in to Spotify and then removes
everything from their library: saved albums, followed artists, saved shows,
saved tracks and followed playlists.
"""

__version__ = "1.0.0"
