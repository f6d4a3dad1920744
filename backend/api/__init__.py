"""
ChurchContent API package.

Provides the FastAPI application for the sermon and Bible-study service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
