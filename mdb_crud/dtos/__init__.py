"""
Request DTOs.
"""

from .user import BaseUserDto, UpdateUserDto

__all__ = ["BaseUserDto", "UpdateUserDto"]
