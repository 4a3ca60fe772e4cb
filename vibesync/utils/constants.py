"""
Constants used for API requests and page rendering.
"""

from yarl import URL

RELEASE = '0.1.0'

USER_AGENT = f'vibesync/{RELEASE}'

SPOTIFY_ACCOUNTS_BASE_URL = URL.build(
    scheme='https',
    host='accounts.spotify.com',
    path='/api'
)

SPOTIFY_AUTHORIZE_URL = URL.build(
    scheme='https',
    host='accounts.spotify.com',
    path='/authorize'
)

SPOTIFY_API_BASE_URL = URL.build(
    scheme='https',
    host='api.spotify.com',
    path='/v1'
)

SPOTIFY_EMBED_BASE_URL = URL.build(
    scheme='https',
    host='open.spotify.com',
    path='/embed'
)

SPOTIFY_OAUTH_SCOPES = [
    'user-read-private',        # Get username
    'user-read-email',          # Also for username, weirdly
    'playlist-read-private'     # Get owned playlists
]

# Shown in place of missing playlist and album artwork
PLACEHOLDER_IMAGE = '/placeholder.svg'

# Shown in place of a missing playlist description
NO_DESCRIPTION = 'No description'

# Number of playlists shown on the dashboard
DASHBOARD_PLAYLIST_LIMIT = 5

# Number of tracks requested per page of a playlist
TRACK_PAGE_SIZE = 50

# Tokens expiring within this many seconds are refreshed before use
TOKEN_REFRESH_MARGIN = 60
