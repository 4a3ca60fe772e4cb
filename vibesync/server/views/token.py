"""
Local token endpoint. Returns the logged in user's Spotify access token.
"""

from aiohttp import web

from vibesync.utils.credentials import SessionCredentials
from vibesync.utils.exceptions import MissingCredentialError, TokenRefreshError


async def token(request: web.Request):
    """
    Respond with {"access_token": ...}, where the token is null
    if the user is not logged in or the token could not be refreshed.
    """
    credentials = SessionCredentials(request, request.app['config'])
    try:
        access_token = await credentials.get_token()
    except (MissingCredentialError, TokenRefreshError):
        access_token = None

    return web.json_response({'access_token': access_token})
