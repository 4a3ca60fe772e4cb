import logging

from vibesync.dataclass.spotify import SpotifyTrack
from vibesync.views.playback import (PlaybackController, PlaybackState,
                                     embed_url, render_embed)


def _track(track_id: str = 'abc123', name: str = 'Song') -> SpotifyTrack:
    return SpotifyTrack(
        id=track_id,
        name=name,
        artist='Artist',
        cover_url='/placeholder.svg',
        duration_ms=1000
    )


def test_embed_url():
    assert embed_url('abc123') == \
        'https://open.spotify.com/embed/track/abc123?utm_source=generator&autoplay=1'


def test_render_embed():
    html = render_embed('abc123')
    assert html.startswith('<iframe id="spotify-iframe"')
    assert 'src="https://open.spotify.com/embed/track/abc123?utm_source=generator&amp;autoplay=1"' in html
    assert 'height="80"' in html
    assert 'allow="autoplay; clipboard-write; encrypted-media; fullscreen; picture-in-picture"' in html


def test_controller_starts_idle():
    playback = PlaybackController()
    assert playback.state == PlaybackState.IDLE
    assert playback.selected_track is None
    assert playback.embed_html == ''
    assert not playback.loading


def test_select_track():
    playback = PlaybackController()
    track = _track()

    assert playback.select(track) == PlaybackState.EMBEDDED
    assert playback.selected_track is track
    assert 'embed/track/abc123' in playback.embed_html
    assert playback.error is None
    assert not playback.loading


def test_select_track_without_id():
    playback = PlaybackController()

    assert playback.select(_track('', 'Local Song')) == PlaybackState.ERRORED
    assert playback.error == 'Could not load Spotify player for "Local Song". Please try again.'
    assert playback.embed_html == ''
    assert not playback.loading


def test_reselect_restarts():
    playback = PlaybackController()
    playback.select(_track('', 'Local Song'))
    playback.select(_track('xyz'))

    assert playback.state == PlaybackState.EMBEDDED
    assert playback.error is None
    assert 'embed/track/xyz' in playback.embed_html

    playback.select(_track('', 'Local Song'))
    assert playback.embed_html == ''
    assert playback.selected_track.name == 'Local Song'


def test_controller_debug_logger():
    assert PlaybackController(debug=True)._logger.isEnabledFor(logging.DEBUG)
    assert not PlaybackController()._logger.isEnabledFor(logging.DEBUG)
