"""
Web server for the dashboard.
"""

from .main import create_app, run_app

__all__ = ['create_app', 'run_app']
