"""
Dashboard view. Greets the user and lists some of their playlists.
"""

import aiohttp_jinja2
from aiohttp import web

from vibesync.utils.credentials import SessionCredentials
from vibesync.views.dashboard import DashboardLoader


@aiohttp_jinja2.template('dashboard.html')
async def dashboard(request: web.Request):
    """
    Render the dashboard. Failures other than a missing login leave the
    page with a generic greeting and an empty playlist grid.
    """
    config = request.app['config']
    loader = DashboardLoader(
        request.app['spotify'],
        SessionCredentials(request, config),
        debug=config.debug_enabled
    )
    result = await loader.load()
    if result.needs_login:
        raise web.HTTPFound('/')

    return {
        'greeting': result.greeting,
        'playlists': result.playlists
    }
