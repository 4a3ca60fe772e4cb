"""
Turns a selected track into an embedded Spotify player.
"""

from enum import Enum
from typing import Optional

from jinja2 import Environment

from vibesync.dataclass.spotify import SpotifyTrack
from vibesync.utils.constants import SPOTIFY_EMBED_BASE_URL
from vibesync.utils.exceptions import InvalidTrackError
from vibesync.utils.logger import create_logger

EMBED_TEMPLATE = Environment(autoescape=True).from_string(
    '<iframe'
    ' id="spotify-iframe"'
    ' src="{{ src }}"'
    ' width="100%"'
    ' height="80"'
    ' frameborder="0"'
    ' allow="autoplay; clipboard-write; encrypted-media; fullscreen; picture-in-picture"'
    ' style="border-radius: 8px;"'
    '></iframe>'
)


def embed_url(track_id: str) -> str:
    """
    Returns the URL of Spotify's embedded player for a track, set to autoplay.
    """
    url = (SPOTIFY_EMBED_BASE_URL / 'track' / track_id).with_query(
        utm_source='generator',
        autoplay=1
    )
    return str(url)


def render_embed(track_id: str) -> str:
    """
    Returns the markup of an embedded player for a track.
    """
    return EMBED_TEMPLATE.render(src=embed_url(track_id))


class PlaybackState(Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    EMBEDDED = 'embedded'
    ERRORED = 'errored'


class PlaybackController:
    """
    Holds the playback state of a page: the selected track, its embed
    markup, and the error to show if it could not be embedded.
    """

    def __init__(self, debug: bool = False):
        self.state = PlaybackState.IDLE
        self.selected_track: Optional[SpotifyTrack] = None
        self.embed_html = ''
        self.error: Optional[str] = None
        self._logger = create_logger(self.__class__.__name__, debug=debug)

    @property
    def loading(self) -> bool:
        return self.state == PlaybackState.LOADING

    def select(self, track: SpotifyTrack) -> PlaybackState:
        """
        Select a track for playback, replacing any previous selection.

        :return: The resulting state, either EMBEDDED or ERRORED.
        """
        self.state = PlaybackState.IDLE
        self.embed_html = ''
        self.error = None

        self.selected_track = track
        self.state = PlaybackState.LOADING
        try:
            if not track.id:
                raise InvalidTrackError(track.name)
            self.embed_html = render_embed(track.id)
            self.state = PlaybackState.EMBEDDED
        except InvalidTrackError as err:
            self._logger.error('Error setting up Spotify embed: %s', err)
            self.error = err.message
            self.state = PlaybackState.ERRORED
        finally:
            # loading is cleared on every exit path
            if self.state == PlaybackState.LOADING:
                self.state = PlaybackState.IDLE

        return self.state
