"""
Application layer DTOs.
Data Transfer Objects for API requests and responses.
"""

from .base_dto import (
    BaseDTO,
    RequestDTO,
    ResponseDTO,
    EntityIdRequestDTO,
    UserIdRequestDTO,
    EmptyRequestDTO,
    ListRequestDTO,
    DateRangeRequestDTO,
    ListResponseDTO,
    HealthCheckResponseDTO,
    ErrorResponseDTO,
    SortOrder,
)

__all__ = [
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "EntityIdRequestDTO",
    "UserIdRequestDTO",
    "EmptyRequestDTO",
    "ListRequestDTO",
    "DateRangeRequestDTO",
    "ListResponseDTO",
    "HealthCheckResponseDTO",
    "ErrorResponseDTO",
    "SortOrder",
]
