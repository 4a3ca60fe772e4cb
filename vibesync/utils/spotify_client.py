"""
Asynchronous Spotify Web API client that acts on behalf of a logged in user
and follows paginated results to completion.
"""

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Type, Union

from yarl import URL

from vibesync.dataclass.spotify import (SpotifyPlaylist, SpotifyTrack,
                                        SpotifyUser)

from .constants import (DASHBOARD_PLAYLIST_LIMIT, NO_DESCRIPTION,
                        PLACEHOLDER_IMAGE, SPOTIFY_API_BASE_URL,
                        TRACK_PAGE_SIZE, USER_AGENT)
from .exceptions import (PaginationLimitError, SpotifyHTTPError,
                         TrackFetchError)
from .logger import create_logger

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

    from .cancellation import CancellationToken

DEFAULT_MAX_PAGES = 1000


def get_art(art: Optional[List[Dict[str, Any]]], default: str = PLACEHOLDER_IMAGE) -> str:
    """
    Returns the first image URL from a list of artwork images,
    or a specified default if the list is empty.
    """
    if not art:
        return default
    return art[0].get('url') or default


def extract_track_info(track_obj: Dict[str, Any]) -> SpotifyTrack:
    """
    Extracts track information from the Spotify API and returns a SpotifyTrack object.
    """
    if 'track' in track_obj.keys():
        # Nested track (playlist track object)
        track_obj = track_obj['track']

    # Album name and artwork, if present
    album_name = None
    artwork = PLACEHOLDER_IMAGE
    album = track_obj.get('album')
    if album is not None:
        album_name = album.get('name')
        artwork = get_art(album.get('images'))

    artists = track_obj.get('artists') or []
    return SpotifyTrack(
        id=track_obj.get('id') or '',
        name=track_obj.get('name') or '',
        artist=', '.join([x['name'] for x in artists if x.get('name')]),
        cover_url=artwork,
        album=album_name,
        duration_ms=int(track_obj.get('duration_ms') or 0),
        type='track'
    )


def extract_playlist_info(playlist_obj: Dict[str, Any]) -> SpotifyPlaylist:
    """
    Extracts playlist information from the Spotify API and returns a SpotifyPlaylist object.
    """
    return SpotifyPlaylist(
        id=playlist_obj['id'],
        name=playlist_obj.get('name') or '',
        description=playlist_obj.get('description') or NO_DESCRIPTION,
        cover_url=get_art(playlist_obj.get('images'))
    )


class Spotify:
    """
    Spotify Web API client for a user's own data. Every call takes the
    bearer token to act with, so one client can be shared between users.
    """
    def __init__(
        self,
        session: 'ClientSession',
        base_url: Union[str, URL] = SPOTIFY_API_BASE_URL,
        max_pages: int = DEFAULT_MAX_PAGES,
        debug: bool = False
    ):
        self._session = session
        self._base_url = URL(str(base_url).rstrip('/'))
        self._max_pages = max_pages
        self._logger = create_logger(self.__class__.__name__, debug=debug)

    @property
    def base_url(self) -> URL:
        return self._base_url

    def _headers(self, access_token: str) -> Dict[str, str]:
        return {
            'Authorization': f'Bearer {access_token}',
            'User-Agent': USER_AGENT
        }

    @staticmethod
    async def _read_error(response: 'ClientResponse') -> Any:
        """
        Returns the decoded error body of a failed response, or its raw text
        if the body is not JSON.
        """
        try:
            return await response.json(content_type=None)
        except ValueError:
            return await response.text()

    async def _get(
        self,
        url: Union[str, URL],
        access_token: str,
        message: str,
        error_cls: Type[SpotifyHTTPError] = SpotifyHTTPError,
        log_payload: bool = False
    ) -> Dict[str, Any]:
        """
        Performs a GET request and returns the decoded JSON body.
        Raises error_cls if the response status is not 2xx or the body is not JSON.
        """
        if isinstance(url, str):
            url = URL(url, encoded=True)

        async with self._session.get(url, headers=self._headers(access_token)) as response:
            if response.status // 100 != 2:
                payload = await self._read_error(response)
                if log_payload:
                    self._logger.error('Spotify API error: %s', payload)
                else:
                    self._logger.debug('Spotify API error %d for %s', response.status, url.path)

                raise error_cls(message, status=response.status, payload=payload)

            try:
                return await response.json()
            except ValueError as err:
                body = await response.text()
                self._logger.error('Spotify API returned a malformed body for %s', url.path)
                raise error_cls(message, status=response.status, payload=body) from err

    async def get_current_user(self, access_token: str) -> SpotifyUser:
        """
        Returns the profile of the user the access token belongs to.
        """
        parsed = await self._get(
            self._base_url / 'me',
            access_token,
            'Failed to fetch user profile'
        )
        return SpotifyUser(
            id=parsed.get('id') or '',
            display_name=parsed.get('display_name')
        )

    async def get_user_playlists(
        self,
        access_token: str,
        limit: int = DASHBOARD_PLAYLIST_LIMIT
    ) -> List[SpotifyPlaylist]:
        """
        Gets the first `limit` of the user's playlists.
        """
        parsed = await self._get(
            (self._base_url / 'me' / 'playlists').with_query(limit=limit),
            access_token,
            'Failed to fetch playlists',
            log_payload=True
        )
        return [
            extract_playlist_info(playlist)
            for playlist in parsed['items'] if playlist is not None
        ]

    async def get_playlist(self, access_token: str, playlist_id: str) -> SpotifyPlaylist:
        """
        Gets the name, description and artwork of a playlist.
        """
        parsed = await self._get(
            self._base_url / 'playlists' / playlist_id,
            access_token,
            'Failed to fetch playlist'
        )
        return extract_playlist_info(parsed)

    def playlist_tracks_url(self, playlist_id: str, limit: int = TRACK_PAGE_SIZE) -> URL:
        """
        Returns the URL of the first page of a playlist's tracks.
        """
        return (self._base_url / 'playlists' / playlist_id / 'tracks').with_query(limit=limit)

    async def get_all_tracks(
        self,
        url: Union[str, URL],
        access_token: str,
        cancel: Optional['CancellationToken'] = None
    ) -> List[SpotifyTrack]:
        """
        Follows a paginated list of playlist items from `url` until the
        `next` cursor runs out, and returns every track in page order.
        Pages are requested one at a time.

        Raises TrackFetchError if any page fails, in which case the tracks
        fetched so far are discarded.

        :param url: URL of the first page.
        :param access_token: Bearer token to request pages with.
        :param cancel: Checked before every page request.
        """
        tracks: List[SpotifyTrack] = []
        visited: Set[str] = set()
        next_url: Optional[str] = str(url)

        while next_url:
            if next_url in visited:
                self._logger.error('Pagination cursor revisited %s', next_url)
                raise PaginationLimitError('next-page cursor loops')
            if len(visited) >= self._max_pages:
                self._logger.error(
                    'Stopped paginating after %d pages, next page is %s',
                    self._max_pages,
                    next_url
                )
                raise PaginationLimitError(f'more than {self._max_pages} pages')
            if cancel is not None:
                cancel.raise_if_cancelled()

            visited.add(next_url)
            page = await self._get(
                next_url,
                access_token,
                'Failed to fetch tracks',
                error_cls=TrackFetchError
            )

            # Items for tracks removed from Spotify come back as null
            tracks.extend([
                extract_track_info(item)
                for item in page.get('items', [])
                if item is not None and item.get('track') is not None
            ])
            next_url = page.get('next')

        self._logger.debug('Fetched %d tracks in %d pages', len(tracks), len(visited))
        return tracks
