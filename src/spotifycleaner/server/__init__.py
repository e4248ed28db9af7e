"""HTTP server for Spotify Cleaner.

Exposes two routes: ``/`` redirects the browser to Spotify's authorization
page, and ``/callback`` receives the authorization code and cleans the account.
"""
