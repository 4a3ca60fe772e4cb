"""
Login view. Sends the user to Spotify to authorize the app.
"""

from secrets import token_urlsafe

from aiohttp import web
from aiohttp_session import get_session

from vibesync.utils.constants import SPOTIFY_AUTHORIZE_URL, SPOTIFY_OAUTH_SCOPES


async def login(request: web.Request):
    """
    Generate and store a state token, then redirect to the Spotify authorization page.
    """
    session = await get_session(request)

    # Get OAuth ID and base URL
    oauth_id = request.app['config'].spotify_client_id
    base_url = request.app['config'].base_url

    # Generate and store state
    state = token_urlsafe(16)
    session['state'] = state

    url = SPOTIFY_AUTHORIZE_URL.with_query({
        'client_id': oauth_id,
        'response_type': 'code',
        'scope': ' '.join(SPOTIFY_OAUTH_SCOPES),
        'redirect_uri': f'{base_url}/spotifyoauth',
        'state': state
    })

    raise web.HTTPFound(url)
