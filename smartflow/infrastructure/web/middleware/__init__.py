"""
HTTP middleware and error rendering.
"""

from .error_handler import (
    ErrorHandlerMiddleware,
    BusinessException,
    STATUS_BY_ERROR_CODE,
    business_exception_handler,
    raise_for_result,
    request_validation_handler,
)

__all__ = [
    "ErrorHandlerMiddleware",
    "BusinessException",
    "STATUS_BY_ERROR_CODE",
    "business_exception_handler",
    "raise_for_result",
    "request_validation_handler",
]
