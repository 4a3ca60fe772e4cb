import pytest

from vibesync.utils.config import load_config

CONFIG_YML = """
spotify:
  client_id: file-id
  client_secret: file-secret
server:
  port: 9000
  base_url: https://vibes.example.com/
client:
  request_timeout: 3
  max_track_pages: 20
debug: true
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / 'config.yml'
    path.write_text(CONFIG_YML, encoding='utf-8')
    return str(path)


def test_load_from_file(config_file):
    config = load_config(config_file, env={})

    assert config.spotify_client_id == 'file-id'
    assert config.spotify_client_secret == 'file-secret'
    assert config.server_port == 9000
    assert config.base_url == 'https://vibes.example.com'
    assert config.request_timeout == 3
    assert config.max_track_pages == 20
    assert config.debug_enabled is True
    assert config.spotify_api_base_url == 'https://api.spotify.com/v1'
    assert config.sentry_dsn is None


def test_env_overrides_file(config_file):
    config = load_config(config_file, env={
        'VIBESYNC_SPOTIFY_ID': 'env-id',
        'VIBESYNC_SERVER_PORT': '8181',
        'VIBESYNC_DEBUG': 'false',
        'VIBESYNC_MAX_TRACK_PAGES': '5',
    })

    assert config.spotify_client_id == 'env-id'
    assert config.spotify_client_secret == 'file-secret'
    assert config.server_port == 8181
    assert config.debug_enabled is False
    assert config.max_track_pages == 5


def test_env_only(tmp_path):
    config = load_config(str(tmp_path / 'missing.yml'), env={
        'VIBESYNC_SPOTIFY_ID': 'env-id',
        'VIBESYNC_SPOTIFY_SECRET': 'env-secret',
    })

    assert config.spotify_client_id == 'env-id'
    assert config.server_port == 8080
    assert config.base_url == 'http://localhost:8080'


def test_missing_client_secret(tmp_path):
    with pytest.raises(ValueError, match='client secret'):
        load_config(str(tmp_path / 'missing.yml'), env={'VIBESYNC_SPOTIFY_ID': 'env-id'})


def test_missing_section(tmp_path):
    path = tmp_path / 'config.yml'
    path.write_text('server:\n  port: 9000\n', encoding='utf-8')

    with pytest.raises(RuntimeError, match='spotify'):
        load_config(str(path), env={})


def test_malformed_file(tmp_path):
    path = tmp_path / 'config.yml'
    path.write_text('spotify: [unclosed\n', encoding='utf-8')

    with pytest.raises(ValueError, match='Error parsing'):
        load_config(str(path), env={})


def test_invalid_page_limit(tmp_path):
    with pytest.raises(ValueError, match='max_track_pages'):
        load_config(str(tmp_path / 'missing.yml'), env={
            'VIBESYNC_SPOTIFY_ID': 'env-id',
            'VIBESYNC_SPOTIFY_SECRET': 'env-secret',
            'VIBESYNC_MAX_TRACK_PAGES': '0',
        })
