"""
In-process stand-in for the Spotify Web API, served by an aiohttp test server.
"""

from typing import Any, Callable, Dict, List, Optional, Set

from aiohttp import web
from yarl import URL


def make_track_item(n: int, **overrides: Any) -> Dict[str, Any]:
    """
    Returns a playlist item wrapping track number `n`.
    """
    track = {
        'id': f't{n}',
        'name': f'Track {n}',
        'artists': [{'name': 'Artist A'}, {'name': 'Artist B'}],
        'album': {
            'name': f'Album {n}',
            'images': [{'url': f'https://i.scdn.co/image/{n}'}]
        },
        'duration_ms': 215000,
    }
    track.update(overrides)
    return {'added_at': '2024-01-01T00:00:00Z', 'track': track}


def make_playlist(playlist_id: str, **overrides: Any) -> Dict[str, Any]:
    playlist = {
        'id': playlist_id,
        'name': f'Playlist {playlist_id}',
        'description': f'Description of {playlist_id}',
        'images': [{'url': f'https://i.scdn.co/playlist/{playlist_id}'}],
    }
    playlist.update(overrides)
    return playlist


class FakeSpotify:
    """
    Serves /v1/me, /v1/me/playlists, /v1/playlists/{id} and paginated
    /v1/playlists/{id}/tracks from in-memory data.
    """

    def __init__(self):
        self.tokens: Set[str] = {'tok1'}
        self.profile: Dict[str, Any] = {'id': 'user1', 'display_name': 'Alice'}
        self.playlists: Dict[str, Dict[str, Any]] = {}
        self.tracks: Dict[str, List[Optional[Dict[str, Any]]]] = {}

        # Request path (with query string) or bare path -> status to fail with
        self.failures: Dict[str, int] = {}

        # Request path -> body served with a JSON content type, whatever it holds
        self.raw_bodies: Dict[str, str] = {}

        # When set, every tracks page points back at the first page
        self.loop_cursor = False

        # Called with the request after every tracks page is served
        self.after_tracks_page: Optional[Callable[[web.Request], None]] = None

        self.requests: List[str] = []
        self.base_url = URL('http://localhost/v1')

        self.app = web.Application()
        self.app.router.add_get('/v1/me', self.me)
        self.app.router.add_get('/v1/me/playlists', self.me_playlists)
        self.app.router.add_get('/v1/playlists/{playlist_id}', self.playlist)
        self.app.router.add_get('/v1/playlists/{playlist_id}/tracks', self.playlist_tracks)

    def add_playlist(self, playlist_id: str, tracks: List[Optional[Dict[str, Any]]], **overrides: Any):
        self.playlists[playlist_id] = make_playlist(playlist_id, **overrides)
        self.tracks[playlist_id] = tracks

    def _check(self, request: web.Request) -> Optional[web.Response]:
        self.requests.append(request.path_qs)

        authorized = {f'Bearer {token}' for token in self.tokens}
        if request.headers.get('Authorization') not in authorized:
            return web.json_response(
                {'error': {'status': 401, 'message': 'Invalid access token'}},
                status=401
            )

        status = self.failures.get(request.path_qs) or self.failures.get(request.path)
        if status is not None:
            return web.json_response(
                {'error': {'status': status, 'message': 'Injected failure'}},
                status=status
            )

        body = self.raw_bodies.get(request.path)
        if body is not None:
            return web.Response(text=body, content_type='application/json')
        return None

    async def me(self, request: web.Request):
        error = self._check(request)
        if error is not None:
            return error
        return web.json_response(self.profile)

    async def me_playlists(self, request: web.Request):
        error = self._check(request)
        if error is not None:
            return error

        limit = int(request.query.get('limit', 20))
        return web.json_response({'items': list(self.playlists.values())[:limit]})

    async def playlist(self, request: web.Request):
        error = self._check(request)
        if error is not None:
            return error

        playlist = self.playlists.get(request.match_info['playlist_id'])
        if playlist is None:
            return web.json_response(
                {'error': {'status': 404, 'message': 'Not found.'}},
                status=404
            )
        return web.json_response(playlist)

    async def playlist_tracks(self, request: web.Request):
        error = self._check(request)
        if error is not None:
            return error

        playlist_id = request.match_info['playlist_id']
        items = self.tracks.get(playlist_id, [])
        offset = int(request.query.get('offset', 0))
        limit = int(request.query.get('limit', 100))

        tracks_url = self.base_url / 'playlists' / playlist_id / 'tracks'
        next_url = None
        if self.loop_cursor:
            next_url = str(tracks_url.with_query(limit=limit))
        elif offset + limit < len(items):
            next_url = str(tracks_url.with_query(offset=offset + limit, limit=limit))

        if self.after_tracks_page is not None:
            self.after_tracks_page(request)

        return web.json_response({
            'items': items[offset:offset + limit],
            'next': next_url,
            'offset': offset,
            'limit': limit,
            'total': len(items)
        })
