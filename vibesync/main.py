"""
Main entry point. Parses the configuration and runs the web server.
"""

from vibesync.server import run_app
from vibesync.utils.config import load_config
from vibesync.utils.constants import RELEASE
from vibesync.utils.logger import create_logger, init_sentry


def main():
    config = load_config()
    sentry_enabled = init_sentry(config)
    logger = create_logger('main', debug=config.debug_enabled)

    # Print parsed config
    if config.debug_enabled:
        logger.debug('Parsed configuration:')
        logger.debug('  Spotify client ID: %s...', config.spotify_client_id[:3])
        logger.debug('  Spotify client secret: %s...', config.spotify_client_secret[:3])
        logger.debug('  Spotify API: %s', config.spotify_api_base_url)
        logger.debug('  Request timeout: %.1f s', config.request_timeout)
        logger.debug('  Max track pages: %d', config.max_track_pages)
        logger.debug('  Webserver:')
        logger.debug('    - Listening on port %d', config.server_port)
        logger.debug('    - Base URL: %s', config.base_url)
        logger.debug(
            '    - Session key: %s',
            'configured' if config.session_key is not None else 'generated'
        )

        if sentry_enabled:
            assert config.sentry_dsn is not None
            logger.debug('  Sentry DSN: %s...', config.sentry_dsn[:10])
            logger.debug('  Sentry environment: %s', config.sentry_env)
        else:
            logger.debug('  Sentry integration disabled')

    logger.info('VibeSync release %s booting up...', RELEASE)
    run_app(config)


if __name__ == '__main__':
    main()
