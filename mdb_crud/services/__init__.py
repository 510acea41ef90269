"""
Entity services built on the generic CRUD layer.
"""

from .user import UserService

__all__ = ["UserService"]
