"""
Playlist view. Lists every track of a playlist and plays the selected one.
"""

from typing import Optional

import aiohttp_jinja2
from aiohttp import web

from vibesync.dataclass.spotify import SpotifyPlaylistDetail
from vibesync.utils.cancellation import CancellationToken
from vibesync.utils.credentials import SessionCredentials
from vibesync.utils.exceptions import MissingCredentialError
from vibesync.views.playback import PlaybackController
from vibesync.views.playlist import PlaylistLoader

LOAD_ERROR_MSG = 'Failed to load playlist data'


@aiohttp_jinja2.template('playlist.html')
async def playlist(request: web.Request):
    """
    Render a playlist. The `track` query parameter selects the track to play.
    """
    playlist_id = request.match_info['playlist_id']
    logger = request.app['logger']
    config = request.app['config']
    loader = PlaylistLoader(
        request.app['spotify'],
        SessionCredentials(request, config),
        debug=config.debug_enabled
    )

    # Register the load so it is cancelled if the server shuts down
    cancel = CancellationToken()
    request.app['loads'].add(cancel)
    detail: Optional[SpotifyPlaylistDetail] = None
    error: Optional[str] = None
    try:
        detail = await loader.load(playlist_id, cancel=cancel)
    except MissingCredentialError:
        raise web.HTTPFound('/')
    except Exception as err:
        logger.error('Error fetching playlist data: %s', str(err) or type(err).__name__)
        error = LOAD_ERROR_MSG
    finally:
        request.app['loads'].discard(cancel)

    # Select track for playback
    playback = PlaybackController(debug=config.debug_enabled)
    track_id = request.query.get('track')
    if detail is not None and track_id is not None:
        track = next((x for x in detail.tracks if x.id == track_id), None)
        if track is not None:
            playback.select(track)
        else:
            logger.warning('Track %s is not in playlist %s', track_id, playlist_id)

    return {
        'playlist': detail,
        'error': error,
        'playback': playback
    }
