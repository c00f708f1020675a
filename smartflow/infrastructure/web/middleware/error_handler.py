"""
Translation of use case failures into HTTP responses, plus a last-resort
middleware for exceptions nothing else handled.
"""

import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import status
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from smartflow.application.dto.base_dto import ErrorResponseDTO
from smartflow.application.use_cases.base_use_case import ErrorKind, UseCaseResult
from smartflow.config import settings

logger = logging.getLogger(__name__)


STATUS_BY_ERROR_CODE = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_NAME: status.HTTP_409_CONFLICT,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_CONTEXT: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

ERROR_TITLES = {
    status.HTTP_401_UNAUTHORIZED: "Unauthorized",
    status.HTTP_403_FORBIDDEN: "Forbidden",
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_409_CONFLICT: "Conflict",
    status.HTTP_422_UNPROCESSABLE_ENTITY: "Validation Error",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal Server Error",
}


class BusinessException(Exception):
    """A failed use case on its way to the client."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)

    @classmethod
    def from_result(cls, result: UseCaseResult) -> "BusinessException":
        kind = result.error_kind or ErrorKind.UNEXPECTED
        return cls(
            message=result.error or "An unexpected error occurred",
            error_code=kind.value,
            status_code=STATUS_BY_ERROR_CODE[kind]
        )


def raise_for_result(result: UseCaseResult):
    """Return the result data, or raise the HTTP rendition of its failure."""
    if not result.success:
        raise BusinessException.from_result(result)
    return result.data


def business_error_body(exc: BusinessException) -> Dict[str, Any]:
    return ErrorResponseDTO(
        error=ERROR_TITLES.get(exc.status_code, exc.error_code or "Bad Request"),
        message=exc.message,
        status_code=exc.status_code,
        error_code=exc.error_code,
        details=exc.details or None
    ).model_dump(exclude_none=True)


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """Exception handler rendering business failures raised by the routers."""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=business_error_body(exc), headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed bodies, queries and path values in the common error shape."""
    errors = [
        {"loc": [str(part) for part in error["loc"]], "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    message = "; ".join(f"{'.'.join(error['loc'])}: {error['msg']}" for error in errors)
    return await business_exception_handler(request, BusinessException(
        message=message or "Invalid request",
        error_code=ErrorKind.VALIDATION_ERROR.value,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"errors": errors}
    ))


def unexpected_error_body(exc: Exception) -> Dict[str, Any]:
    if isinstance(exc, TimeoutError):
        code = status.HTTP_408_REQUEST_TIMEOUT
        body = ErrorResponseDTO(error="Request Timeout", message="The request took too long to process",
                                status_code=code, error_code=ErrorKind.UNEXPECTED.value)
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
        body = ErrorResponseDTO(error=ERROR_TITLES[code], message="An unexpected error occurred",
                                status_code=code, error_code=ErrorKind.UNEXPECTED.value)
    return body.model_dump(exclude_none=True)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Render any exception escaping a route as a JSON error body."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except BusinessException as exc:
            return await business_exception_handler(request, exc)
        except Exception as exc:
            logger.error(
                f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}: {exc}",
                exc_info=True,
                extra={"client_host": request.client.host if request.client else None}
            )
            content = unexpected_error_body(exc)
            if settings.debug:
                content["debug"] = {
                    "exception_type": type(exc).__name__,
                    "traceback": traceback.format_exc().splitlines(),
                }
            return JSONResponse(status_code=content["status_code"], content=content)
