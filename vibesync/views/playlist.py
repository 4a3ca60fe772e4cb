"""
Loads a playlist together with every one of its tracks.
"""

from typing import TYPE_CHECKING, Optional

from vibesync.dataclass.spotify import SpotifyPlaylistDetail
from vibesync.utils.logger import create_logger

if TYPE_CHECKING:
    from vibesync.utils.cancellation import CancellationToken
    from vibesync.utils.credentials import CredentialProvider
    from vibesync.utils.spotify_client import Spotify


class PlaylistLoader:
    """
    Fetches a playlist's details, then walks its track pages to the end.
    Errors propagate to the caller.
    """

    def __init__(
        self,
        spotify: 'Spotify',
        credentials: 'CredentialProvider',
        debug: bool = False
    ):
        self._spotify = spotify
        self._credentials = credentials
        self._logger = create_logger(self.__class__.__name__, debug=debug)

    async def load(
        self,
        playlist_id: str,
        cancel: Optional['CancellationToken'] = None
    ) -> SpotifyPlaylistDetail:
        access_token = await self._credentials.get_token()

        playlist = await self._spotify.get_playlist(access_token, playlist_id)
        tracks = await self._spotify.get_all_tracks(
            self._spotify.playlist_tracks_url(playlist_id),
            access_token,
            cancel=cancel
        )
        self._logger.debug('Loaded playlist %s with %d tracks', playlist_id, len(tracks))

        return SpotifyPlaylistDetail(
            id=playlist.id,
            name=playlist.name,
            description=playlist.description,
            cover_url=playlist.cover_url,
            tracks=tracks
        )
