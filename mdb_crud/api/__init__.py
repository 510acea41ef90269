"""
HTTP surface: FastAPI application, routes, dependencies and error mapping.
"""

from .app import create_app

__all__ = ["create_app"]
