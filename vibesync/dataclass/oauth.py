"""
Dataclass for storing Spotify authentication data.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, List


@dataclass
class SpotifyCredentials:
    """
    Dataclass for storing Spotify authentication data
    obtained using the Authorization Code Flow.
    """
    access_token: str
    refresh_token: str
    expires_at: int
    scopes: List[str]

    def to_dict(self) -> Dict[str, Any]:
        """
        Returns the credentials as a JSON-serializable dict for session storage.
        """
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SpotifyCredentials':
        """
        Rebuilds credentials stored with to_dict().
        """
        return cls(
            access_token=data['access_token'],
            refresh_token=data['refresh_token'],
            expires_at=int(data['expires_at']),
            scopes=list(data.get('scopes', []))
        )
