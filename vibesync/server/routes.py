"""
Adds routes to the application.
"""

from typing import TYPE_CHECKING

from .views.dashboard import dashboard
from .views.homepage import homepage
from .views.login import login
from .views.logout import logout
from .views.playlist import playlist
from .views.robotstxt import robotstxt
from .views.spotifyoauth import spotifyoauth
from .views.token import token

if TYPE_CHECKING:
    from aiohttp.web import Application


def setup_routes(app: 'Application'):
    """
    Add all available routes to the application.
    """
    app.router.add_get('/', homepage)
    app.router.add_get('/api/token', token)
    app.router.add_get('/dashboard', dashboard)
    app.router.add_get('/dashboard/playlist/{playlist_id}', playlist)
    app.router.add_get('/login', login)
    app.router.add_get('/logout', logout)
    app.router.add_get('/robots.txt', robotstxt)
    app.router.add_get('/spotifyoauth', spotifyoauth)
