"""
Homepage view.
"""

import aiohttp_jinja2
from aiohttp import web
from aiohttp_session import get_session

from vibesync.utils.credentials import SESSION_KEY


@aiohttp_jinja2.template('homepage.html')
async def homepage(request: web.Request):
    """
    Render the homepage, or redirect to the dashboard if the user is logged in.
    """
    session = await get_session(request)
    if SESSION_KEY in session:
        raise web.HTTPFound('/dashboard')

    return {}
