"""
Spotify OAuth view. Displayed on redirect from Spotify auth flow.
"""

from asyncio import get_running_loop
from base64 import b64encode
from functools import partial
from time import time

import requests
from aiohttp import web
from aiohttp_session import get_session
from requests.exceptions import HTTPError, RequestException, Timeout

from vibesync.dataclass.oauth import SpotifyCredentials
from vibesync.utils.constants import SPOTIFY_ACCOUNTS_BASE_URL, USER_AGENT
from vibesync.utils.credentials import SESSION_KEY


async def spotifyoauth(request: web.Request):
    """
    Exchange the code for an access token and store it in the session.
    """
    session = await get_session(request)
    if 'state' not in session:
        raise web.HTTPBadRequest(text='Missing state, try logging in again.')

    # Get OAuth ID, secret, and base URL
    config = request.app['config']
    oauth_id = config.spotify_client_id
    oauth_secret = config.spotify_client_secret
    base_url = config.base_url

    # Spotify redirects with an error parameter if the user declined
    if 'error' in request.query:
        raise web.HTTPBadRequest(text=f'Spotify login failed: {request.query["error"]}')

    # Get code
    try:
        code = request.query['code']
        state = request.query['state']
    except KeyError as err:
        raise web.HTTPBadRequest(text=f'Missing parameter: {err.args[0]}')

    # Check state
    if state != session['state']:
        raise web.HTTPBadRequest(text='Invalid state, try logging in again.')

    # Get access token, off the event loop since requests blocks
    loop = get_running_loop()
    try:
        response = await loop.run_in_executor(None, partial(
            requests.post,
            str(SPOTIFY_ACCOUNTS_BASE_URL / 'token'),
            data={
                'grant_type': 'authorization_code',
                'code': code,
                'redirect_uri': f'{base_url}/spotifyoauth'
            },
            headers={
                'Authorization': f'Basic {b64encode(f"{oauth_id}:{oauth_secret}".encode()).decode()}',
                'Content-Type': 'application/x-www-form-urlencoded',
                'User-Agent': USER_AGENT
            },
            timeout=config.request_timeout
        ))
        response.raise_for_status()
    except HTTPError as err:
        raise web.HTTPBadRequest(text=f'Error getting Spotify access token: {err}')
    except Timeout:
        raise web.HTTPBadRequest(text='Timed out while requesting Spotify access token')
    except RequestException as err:
        raise web.HTTPBadRequest(text=f'Could not reach Spotify: {err}')

    # Store credentials in session
    try:
        parsed = response.json()
        credentials = SpotifyCredentials(
            access_token=parsed['access_token'],
            refresh_token=parsed['refresh_token'],
            expires_at=int(time()) + parsed['expires_in'],
            scopes=parsed.get('scope', '').split()
        )
    except (KeyError, ValueError) as err:
        raise web.HTTPBadRequest(text=f'Malformed Spotify token response: {err}')
    session[SESSION_KEY] = credentials.to_dict()

    # Redirect to dashboard
    del session['state']
    raise web.HTTPFound('/dashboard')
