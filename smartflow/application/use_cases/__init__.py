"""
Application layer use cases.
Business logic for time tracking, timesheets and reporting.
"""

from .base_use_case import (
    BaseUseCase,
    QueryUseCase,
    CommandUseCase,
    PaginatedQueryUseCase,
    UseCaseResult,
    ErrorKind,
    IdentityContext,
)

__all__ = [
    # Base Use Cases
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "PaginatedQueryUseCase",
    "UseCaseResult",
    "ErrorKind",
    "IdentityContext",
]
