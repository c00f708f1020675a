"""
JWT token handler.
Verifies bearer tokens issued by the identity service and extracts the caller's identity.
"""

from typing import Any, Dict, Optional

from jose import JWTError, jwt

from smartflow.config import Settings, get_settings
from smartflow.domain.models.base import InvalidContextError


class JWTHandler:
    """Handles JWT token validation and identity extraction."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.jwt_secret = self.settings.jwt_secret_key
        self.jwt_algorithm = self.settings.jwt_algorithm

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string, with or without the 'Bearer ' prefix

        Returns:
            Dict containing token payload

        Raises:
            InvalidContextError: If the token is invalid, expired or lacks the identity claims
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_aud": False}
            )
        except JWTError as e:
            raise InvalidContextError(f"Invalid JWT token: {str(e)}")

        if not payload.get('sub'):
            raise InvalidContextError("Token missing user ID (sub claim)")
        if not payload.get('tenant_id'):
            raise InvalidContextError("Token missing tenant ID (tenant_id claim)")

        return payload

    def get_identity(self, token: str) -> Dict[str, str]:
        """User and tenant IDs carried by the token."""
        payload = self.decode_token(token)
        return {"user_id": str(payload['sub']), "tenant_id": str(payload['tenant_id'])}
