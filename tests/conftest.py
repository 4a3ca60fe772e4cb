import pytest
from aiohttp import ClientSession

from tests.support.fake_spotify import FakeSpotify, make_track_item
from vibesync.dataclass.config import Config
from vibesync.utils.spotify_client import Spotify


@pytest.fixture
async def fake_spotify(aiohttp_server):
    fake = FakeSpotify()
    fake.add_playlist('p1', [make_track_item(n) for n in range(1, 4)])
    server = await aiohttp_server(fake.app)
    fake.base_url = server.make_url('/v1')
    return fake


@pytest.fixture
async def http_session():
    async with ClientSession() as session:
        yield session


@pytest.fixture
def spotify(fake_spotify, http_session):
    return Spotify(http_session, base_url=fake_spotify.base_url)


@pytest.fixture
def config(fake_spotify):
    return Config(
        spotify_client_id='test-client-id',
        spotify_client_secret='test-client-secret',
        spotify_api_base_url=str(fake_spotify.base_url),
        base_url='http://localhost:8080',
        request_timeout=5
    )
