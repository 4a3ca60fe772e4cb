"""
Configuration parser.

This module parses the configuration file and environment variables and
provides a single object with the synthesized configuration values,
where the environment variables take precedence over the config file.
"""

from os import environ
from os.path import isfile
from typing import Any, Dict, Mapping, Optional

from yaml import safe_load

from vibesync.dataclass.config import Config


def _parse_bool(value: str) -> bool:
    return value.lower() == 'true'


def _read_config_file(path: str) -> Dict[str, Any]:
    """
    Read config values from a YAML file into a flat dict of Config fields.
    """
    values: Dict[str, Any] = {}

    with open(path, encoding='UTF-8') as f:
        try:
            config_file = safe_load(f) or {}
        except Exception as e:
            raise ValueError(f'Error parsing {path}: {e}') from e

    try:
        values['spotify_client_id'] = config_file['spotify']['client_id']
        values['spotify_client_secret'] = config_file['spotify']['client_secret']
        if 'api_base_url' in config_file['spotify']:
            values['spotify_api_base_url'] = config_file['spotify']['api_base_url']

        # Add optional config values
        if 'server' in config_file:
            server = config_file['server']
            if 'port' in server:
                values['server_port'] = server['port']
            if 'base_url' in server:
                values['base_url'] = server['base_url']
            if 'session_key' in server:
                values['session_key'] = server['session_key']
        if 'client' in config_file:
            client = config_file['client']
            if 'request_timeout' in client:
                values['request_timeout'] = client['request_timeout']
            if 'max_track_pages' in client:
                values['max_track_pages'] = client['max_track_pages']
        if 'debug' in config_file:
            values['debug_enabled'] = config_file['debug']
        if 'sentry' in config_file:
            values['sentry_dsn'] = config_file['sentry']['dsn']
            values['sentry_env'] = config_file['sentry']['environment']
    except (KeyError, TypeError) as e:
        missing = e.args[0] if isinstance(e, KeyError) else str(e)
        raise RuntimeError(f'Config missing from {path}: {missing}') from e

    return values


def load_config(
    path: str = 'config.yml',
    env: Optional[Mapping[str, str]] = None
) -> Config:
    """
    Parse the config file at `path` if it exists, apply environment variable
    overrides and return the resulting Config.

    :param path: Path to the YAML config file.
    :param env: Environment to read overrides from. Defaults to os.environ.
    """
    if env is None:
        env = environ

    values: Dict[str, Any] = {}
    if isfile(path):
        values = _read_config_file(path)

    # Override config from environment variables
    if 'VIBESYNC_SPOTIFY_ID' in env:
        values['spotify_client_id'] = env['VIBESYNC_SPOTIFY_ID']
    if 'VIBESYNC_SPOTIFY_SECRET' in env:
        values['spotify_client_secret'] = env['VIBESYNC_SPOTIFY_SECRET']
    if 'VIBESYNC_SPOTIFY_API_URL' in env:
        values['spotify_api_base_url'] = env['VIBESYNC_SPOTIFY_API_URL']
    if 'VIBESYNC_SERVER_PORT' in env:
        values['server_port'] = int(env['VIBESYNC_SERVER_PORT'])
    if 'VIBESYNC_BASE_URL' in env:
        values['base_url'] = env['VIBESYNC_BASE_URL']
    if 'VIBESYNC_SESSION_KEY' in env:
        values['session_key'] = env['VIBESYNC_SESSION_KEY']
    if 'VIBESYNC_REQUEST_TIMEOUT' in env:
        values['request_timeout'] = float(env['VIBESYNC_REQUEST_TIMEOUT'])
    if 'VIBESYNC_MAX_TRACK_PAGES' in env:
        values['max_track_pages'] = int(env['VIBESYNC_MAX_TRACK_PAGES'])
    if 'VIBESYNC_DEBUG' in env:
        values['debug_enabled'] = _parse_bool(env['VIBESYNC_DEBUG'])
    if 'VIBESYNC_SENTRY_DSN' in env:
        values['sentry_dsn'] = env['VIBESYNC_SENTRY_DSN']
    if 'VIBESYNC_SENTRY_ENV' in env:
        values['sentry_env'] = env['VIBESYNC_SENTRY_ENV']

    # Final checks
    if values.get('spotify_client_id') is None:
        raise ValueError('No Spotify client ID specified')
    if values.get('spotify_client_secret') is None:
        raise ValueError('No Spotify client secret specified')

    # Strip trailing slashes so redirect URIs can be built with f-strings
    if 'base_url' in values:
        values['base_url'] = str(values['base_url']).rstrip('/')

    return Config(**values)
