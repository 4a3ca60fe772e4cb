"""
VibeSync, a web dashboard for Spotify playlists.
"""
