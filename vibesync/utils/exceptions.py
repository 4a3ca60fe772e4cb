"""
Custom exceptions for VibeSync
"""

from typing import Any, Optional, Union


class VibeSyncException(Exception):
    """
    Custom exception class for VibeSync.
    """

    def __init__(self, message: Union[str, Exception]):
        if isinstance(message, Exception):
            self.message = str(message)
        else:
            self.message = message

        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class MissingCredentialError(VibeSyncException):
    """
    Raised when no Spotify access token is available.
    """

    def __init__(self, message: Optional[str] = None):
        self.message = message or 'No access token found'
        super().__init__(self.message)


class SpotifyHTTPError(VibeSyncException):
    """
    Raised when the Spotify API responds with a non-success status.

    Args:
        - status (int): The HTTP status of the response.
        - payload (Any): The decoded error body, if any.
    """

    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None):
        self.status = status
        self.payload = payload
        super().__init__(message)


class TrackFetchError(SpotifyHTTPError):
    """
    Raised when a page of playlist tracks could not be retrieved.
    """

    def __init__(self, message: str = 'Failed to fetch tracks',
                 status: Optional[int] = None, payload: Any = None):
        super().__init__(message, status=status, payload=payload)


class PaginationLimitError(TrackFetchError):
    """
    Raised when a playlist's next-page cursor loops or runs past the page limit.
    """

    def __init__(self, reason: str):
        super().__init__(f'Failed to fetch tracks: {reason}')


class InvalidTrackError(VibeSyncException):
    """
    Raised when a track without an identifier is selected for playback.
    """

    def __init__(self, name: Optional[str]):
        self.message = f'Could not load Spotify player for "{name}". Please try again.'
        super().__init__(self.message)


class CancellationRequested(VibeSyncException):
    """
    Raised to cooperatively abort an in-flight load.
    """

    def __init__(self):
        self.message = 'Load cancelled'
        super().__init__(self.message)


class TokenRefreshError(VibeSyncException):
    """
    Raised when an expiring access token could not be refreshed because the
    accounts service was unreachable or answered with a malformed body.
    The user stays logged in.
    """

    def __init__(self, message: Optional[str] = None):
        self.message = message or 'Could not refresh access token'
        super().__init__(self.message)
