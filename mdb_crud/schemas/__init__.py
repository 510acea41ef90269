"""
Record schemas.
"""

from .system import System
from .user import USER_COLLECTION, User, UserPopulate, UserProtection

__all__ = ["System", "User", "UserProtection", "UserPopulate", "USER_COLLECTION"]
