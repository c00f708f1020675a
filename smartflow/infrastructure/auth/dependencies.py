"""
Authentication dependencies for FastAPI.
Resolves the identity context every use case receives.
"""

from typing import Annotated, Optional

from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from smartflow.application.use_cases.base_use_case import ErrorKind, IdentityContext
from smartflow.config import Settings, get_settings
from smartflow.domain.models.base import InvalidContextError
from smartflow.infrastructure.auth.jwt_handler import JWTHandler
from smartflow.infrastructure.web.middleware.error_handler import BusinessException


security = HTTPBearer(auto_error=False)


def _unauthorized(message: str) -> BusinessException:
    return BusinessException(
        message=message,
        error_code=ErrorKind.INVALID_CONTEXT.value,
        status_code=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_jwt_handler(settings: Annotated[Settings, Depends(get_settings)]) -> JWTHandler:
    """Dependency to get JWT handler."""
    return JWTHandler(settings)


async def get_identity_context(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
) -> IdentityContext:
    """
    FastAPI dependency resolving the caller's tenant and user from the bearer token.

    Raises:
        BusinessException: 401 INVALID_CONTEXT if the token is missing or invalid
    """
    if credentials is None:
        raise _unauthorized("Authentication required")

    try:
        identity = jwt_handler.get_identity(credentials.credentials)
    except InvalidContextError as e:
        raise _unauthorized(e.message)

    return IdentityContext(tenant_id=identity["tenant_id"], user_id=identity["user_id"])
