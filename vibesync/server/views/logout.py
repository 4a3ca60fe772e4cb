"""
Logout view.
"""

from aiohttp import web
from aiohttp_session import get_session


async def logout(request: web.Request):
    """
    Clear the session and redirect to home.
    """
    session = await get_session(request)
    session.clear()

    raise web.HTTPFound('/')
