"""
Credential providers. Loaders ask one of these for a bearer token
instead of fetching it themselves, so the source of the token can be
swapped between the web session, the local token endpoint, and tests.
"""

from abc import ABC, abstractmethod
from asyncio import get_running_loop
from base64 import b64encode
from functools import partial
from time import time
from typing import TYPE_CHECKING, Optional, Union

import requests
from aiohttp_session import get_session
from requests import HTTPError, RequestException, Timeout
from yarl import URL

from vibesync.dataclass.oauth import SpotifyCredentials

from .constants import SPOTIFY_ACCOUNTS_BASE_URL, TOKEN_REFRESH_MARGIN, USER_AGENT
from .exceptions import MissingCredentialError, TokenRefreshError
from .logger import create_logger

if TYPE_CHECKING:
    from aiohttp import ClientSession, web

    from vibesync.dataclass.config import Config

# Key of the Spotify credentials in the user's session
SESSION_KEY = 'spotify'


class CredentialProvider(ABC):
    """
    Supplies the bearer token to call the Spotify API with.
    """

    @abstractmethod
    async def get_token(self) -> str:
        """
        Returns a bearer token. Raises MissingCredentialError if there is none.
        """


class StaticCredentials(CredentialProvider):
    """
    Always supplies the same token.
    """

    def __init__(self, access_token: Optional[str]):
        self._access_token = access_token

    async def get_token(self) -> str:
        if not self._access_token:
            raise MissingCredentialError
        return self._access_token


class TokenEndpointCredentials(CredentialProvider):
    """
    Fetches the token from a token endpoint returning {"access_token": ...},
    such as this app's own /api/token.
    """

    def __init__(self, session: 'ClientSession', url: Union[str, URL]):
        self._session = session
        self._url = url

    async def get_token(self) -> str:
        async with self._session.get(self._url) as response:
            if response.status // 100 != 2:
                raise MissingCredentialError(
                    f'Token endpoint responded with status {response.status}'
                )
            parsed = await response.json()

        access_token = parsed.get('access_token') if isinstance(parsed, dict) else None
        if not access_token:
            raise MissingCredentialError
        return access_token


def refresh_credentials(config: 'Config', credentials: SpotifyCredentials) -> SpotifyCredentials:
    """
    Refresh the access token using the refresh token, and return the new credentials.
    """
    auth_token = b64encode(
        f'{config.spotify_client_id}:{config.spotify_client_secret}'.encode()
    ).decode()
    response = requests.post(
        str(SPOTIFY_ACCOUNTS_BASE_URL / 'token'),
        headers={
            'Authorization': f'Basic {auth_token}',
            'User-Agent': USER_AGENT
        },
        data={
            'grant_type': 'refresh_token',
            'refresh_token': credentials.refresh_token
        },
        timeout=config.request_timeout
    )
    response.raise_for_status()

    parsed = response.json()
    scopes = parsed['scope'].split(' ') if 'scope' in parsed else credentials.scopes
    return SpotifyCredentials(
        access_token=parsed['access_token'],
        # Spotify only sometimes rotates the refresh token
        refresh_token=parsed.get('refresh_token', credentials.refresh_token),
        expires_at=int(time() + parsed['expires_in']),
        scopes=scopes
    )


class SessionCredentials(CredentialProvider):
    """
    Supplies the token stored in the requesting user's session after
    logging in, refreshing it first if it is about to expire.
    """

    def __init__(self, request: 'web.Request', config: 'Config'):
        self._request = request
        self._config = config
        self._logger = create_logger(self.__class__.__name__, debug=config.debug_enabled)

    async def get_credentials(self) -> Optional[SpotifyCredentials]:
        """
        Returns the stored credentials without refreshing them,
        or None if the user has not logged in.
        """
        session = await get_session(self._request)
        if SESSION_KEY not in session:
            return None
        return SpotifyCredentials.from_dict(session[SESSION_KEY])

    async def get_token(self) -> str:
        credentials = await self.get_credentials()
        if credentials is None:
            raise MissingCredentialError

        if credentials.expires_at < time() + TOKEN_REFRESH_MARGIN:
            self._logger.debug('Refreshing Spotify token')

            # requests blocks, so keep it off the event loop
            loop = get_running_loop()
            try:
                credentials = await loop.run_in_executor(
                    None,
                    partial(refresh_credentials, self._config, credentials)
                )
            except HTTPError as err:
                self._logger.error('Error refreshing Spotify access token: %s', err)

                # The refresh token was most likely revoked, so log the user out
                session = await get_session(self._request)
                session.pop(SESSION_KEY, None)
                raise MissingCredentialError('Could not refresh access token') from err
            except Timeout as err:
                self._logger.error('Timed out while refreshing Spotify access token')
                raise TokenRefreshError from err
            except (RequestException, KeyError, ValueError) as err:
                # Connection failures and malformed token responses
                self._logger.error(
                    'Error refreshing Spotify access token: %s',
                    str(err) or type(err).__name__
                )
                raise TokenRefreshError from err

            session = await get_session(self._request)
            session[SESSION_KEY] = credentials.to_dict()

        return credentials.access_token
