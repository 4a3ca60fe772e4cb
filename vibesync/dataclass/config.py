from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    # Required
    spotify_client_id: str
    spotify_client_secret: str

    # Optional
    spotify_api_base_url: str = 'https://api.spotify.com/v1'
    server_port: int = 8080
    base_url: str = 'http://localhost:8080'
    session_key: Optional[str] = None
    request_timeout: float = 10
    max_track_pages: int = 1000
    debug_enabled: bool = False
    sentry_dsn: Optional[str] = None
    sentry_env: Optional[str] = None

    # Type checking
    def __post_init__(self):
        if not isinstance(self.spotify_client_id, str):
            raise TypeError('spotify_client_id must be a string')
        if not isinstance(self.spotify_client_secret, str):
            raise TypeError('spotify_client_secret must be a string')

        # Check if port and page limit are ints
        if not isinstance(self.server_port, int):
            raise TypeError('server_port must be an int')
        if not isinstance(self.max_track_pages, int):
            raise TypeError('max_track_pages must be an int')
        if self.max_track_pages < 1:
            raise ValueError('max_track_pages must be at least 1')

        if not isinstance(self.request_timeout, (int, float)):
            raise TypeError('request_timeout must be a number')
        if not isinstance(self.debug_enabled, bool):
            raise TypeError('debug_enabled must be a bool')
