"""
Authentication infrastructure module.
Handles JWT validation and identity context resolution.
"""

from .jwt_handler import JWTHandler
from .dependencies import get_jwt_handler, get_identity_context

__all__ = [
    "JWTHandler",
    "get_jwt_handler",
    "get_identity_context",
]
