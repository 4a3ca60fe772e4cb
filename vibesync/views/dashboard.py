"""
Loads the data shown on the dashboard: the user's name and a handful of
their playlists.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from vibesync.dataclass.spotify import SpotifyPlaylist
from vibesync.utils.constants import DASHBOARD_PLAYLIST_LIMIT
from vibesync.utils.exceptions import MissingCredentialError
from vibesync.utils.logger import create_logger

if TYPE_CHECKING:
    from vibesync.utils.credentials import CredentialProvider
    from vibesync.utils.spotify_client import Spotify


@dataclass
class DashboardResult:
    """
    Outcome of loading the dashboard. Whatever loaded before a failure is
    kept, and the failure itself is in `error`.
    """
    username: Optional[str] = None
    playlists: List[SpotifyPlaylist] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def needs_login(self) -> bool:
        return isinstance(self.error, MissingCredentialError)

    @property
    def greeting(self) -> str:
        return f'Welcome back, {self.username or "User"}'


class DashboardLoader:
    """
    Fetches the user's profile and first few playlists.
    """

    def __init__(
        self,
        spotify: 'Spotify',
        credentials: 'CredentialProvider',
        playlist_limit: int = DASHBOARD_PLAYLIST_LIMIT,
        debug: bool = False
    ):
        self._spotify = spotify
        self._credentials = credentials
        self._playlist_limit = playlist_limit
        self._logger = create_logger(self.__class__.__name__, debug=debug)

    async def load(self) -> DashboardResult:
        """
        Never raises. Credential, API, network and malformed response errors
        are logged and returned in the result instead.
        """
        result = DashboardResult()
        try:
            access_token = await self._credentials.get_token()

            user = await self._spotify.get_current_user(access_token)
            result.username = user.name

            result.playlists = await self._spotify.get_user_playlists(
                access_token,
                limit=self._playlist_limit
            )
        except Exception as err:
            self._logger.error('Error fetching user data: %s', str(err) or type(err).__name__)
            result.error = err

        return result
