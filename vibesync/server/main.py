from base64 import urlsafe_b64decode
from pathlib import Path
from typing import TYPE_CHECKING, AsyncIterator, Optional, Set

import aiohttp_jinja2
import jinja2
from aiohttp import ClientSession, ClientTimeout, web
from aiohttp.abc import AbstractAccessLogger
from aiohttp_session import setup as setup_sessions
from aiohttp_session.cookie_storage import EncryptedCookieStorage
from cryptography.fernet import Fernet

from vibesync.utils.cancellation import CancellationToken
from vibesync.utils.logger import create_logger
from vibesync.utils.spotify_client import Spotify
from vibesync.utils.time import format_duration

from .routes import setup_routes

if TYPE_CHECKING:
    from vibesync.dataclass.config import Config

TEMPLATES_DIR = Path(__file__).parent / 'templates'


class AccessLogger(AbstractAccessLogger):
    def log(self, request, response, time):
        self.logger.info(f'Server: {response.status} {request.method}'
                         f' {request.path} (took {time*1000:.2f} ms)')


async def spotify_client_ctx(app: web.Application) -> AsyncIterator[None]:
    """
    Open one HTTP session for all Spotify API calls, for the lifetime of the app.
    """
    config: 'Config' = app['config']
    session = ClientSession(timeout=ClientTimeout(total=config.request_timeout))
    app['spotify'] = Spotify(
        session,
        base_url=config.spotify_api_base_url,
        max_pages=config.max_track_pages,
        debug=config.debug_enabled
    )
    yield
    await session.close()


async def cancel_loads(app: web.Application):
    """
    Stop every playlist load still in flight.
    """
    loads: Set[CancellationToken] = app['loads']
    if len(loads) > 0:
        app['logger'].info('Cancelling %d in-flight playlist loads', len(loads))
    for token in loads:
        token.cancel()


def create_app(config: 'Config', session_key: Optional[str] = None) -> web.Application:
    """
    Create the web application.

    :param config: Parsed configuration.
    :param session_key: Fernet key for the session cookie. Defaults to the
        configured key, or a newly generated one.
    """
    app = web.Application()
    app['config'] = config
    app['logger'] = create_logger('server', debug=config.debug_enabled)
    app['loads'] = set()

    # Setup sessions
    fernet_key = session_key or config.session_key or Fernet.generate_key().decode()
    setup_sessions(app, EncryptedCookieStorage(urlsafe_b64decode(fernet_key)))

    # Setup templates and routes
    aiohttp_jinja2.setup(
        app,
        loader=jinja2.FileSystemLoader(str(TEMPLATES_DIR)),
        filters={'duration': format_duration}
    )
    setup_routes(app)

    app.cleanup_ctx.append(spotify_client_ctx)
    app.on_shutdown.append(cancel_loads)
    return app


def run_app(config: 'Config'):
    """
    Run the web server until interrupted.
    """
    app = create_app(config)
    logger = app['logger']
    logger.info('Web server starting on port %d', config.server_port)
    web.run_app(
        app,
        port=config.server_port,
        access_log=logger,
        access_log_class=AccessLogger,
        print=None
    )
