"""
Dataclasses for storing Spotify entities shown on the dashboard.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SpotifyTrack:
    """
    Dataclass for storing a Spotify track entity.
    """
    id: str
    name: str
    artist: str       # All artists, separated by ', '
    cover_url: str
    duration_ms: int
    album: Optional[str] = None
    type: str = 'track'


@dataclass
class SpotifyPlaylist:
    """
    Dataclass for storing a summary of a Spotify playlist,
    as listed on the dashboard.
    """
    id: str
    name: str
    description: str
    cover_url: str


@dataclass
class SpotifyPlaylistDetail(SpotifyPlaylist):
    """
    Dataclass for storing a Spotify playlist together with all of its tracks.
    """
    tracks: List[SpotifyTrack] = field(default_factory=list)


@dataclass
class SpotifyUser:
    """
    Dataclass for storing the profile of the logged in Spotify user.
    """
    id: str
    display_name: Optional[str] = None

    @property
    def name(self) -> str:
        """
        Returns the display name, or the account ID if the user has none.
        """
        return self.display_name or self.id
