"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, TypeVar, Generic, Union
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
import logging
import uuid

from pydantic import ValidationError as PydanticValidationError

from smartflow.domain.models.base import (
    DomainException,
    InvalidContextError,
    ValidationError,
    utcnow,
)
from smartflow.domain.repositories.unit_of_work import UnitOfWork


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

Clock = Callable[[], datetime]


class ErrorKind(str, Enum):
    """Failure categories carried by a failed result."""
    INVALID_CONTEXT = "INVALID_CONTEXT"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    CONFLICT = "CONFLICT"
    INVALID_STATE = "INVALID_STATE"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNEXPECTED = "UNEXPECTED"


def _parse_uuid(value: Union[str, uuid.UUID, None]) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    if not value:
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


@dataclass(frozen=True)
class IdentityContext:
    """
    The caller's tenant and user, as resolved by the transport.
    Raw values are kept as given and parsed on demand.
    """

    tenant_id: Union[str, uuid.UUID, None] = None
    user_id: Union[str, uuid.UUID, None] = None

    def require_tenant(self) -> uuid.UUID:
        tenant_id = _parse_uuid(self.tenant_id)
        if tenant_id is None:
            raise InvalidContextError("Invalid tenant context")
        return tenant_id

    def require_user(self) -> uuid.UUID:
        user_id = _parse_uuid(self.user_id)
        if user_id is None:
            raise InvalidContextError("Invalid user context")
        return user_id

    def require_tenant_and_user(self):
        """Both IDs, or a single "invalid user or tenant" failure."""
        tenant_id = _parse_uuid(self.tenant_id)
        user_id = _parse_uuid(self.user_id)
        if tenant_id is None or user_id is None:
            raise InvalidContextError()
        return tenant_id, user_id


@dataclass
class UseCaseResult(Generic[T]):
    """Result wrapper for use case operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def error_result(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "UseCaseResult[T]":
        """Create an error result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata
        )

    @classmethod
    def from_exception(cls, exc: Exception, operation: str = "processing request") -> "UseCaseResult[T]":
        """Create error result from exception."""
        if isinstance(exc, DomainException):
            return cls.error_result(exc.message, exc.code)
        elif isinstance(exc, PydanticValidationError):
            return cls.error_result(str(exc), ErrorKind.VALIDATION_ERROR.value)
        else:
            return cls.error_result(f"Error {operation}: {exc}", ErrorKind.UNEXPECTED.value)

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        if self.success or self.error_code is None:
            return None
        try:
            return ErrorKind(self.error_code)
        except ValueError:
            return ErrorKind.UNEXPECTED


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Provides common structure and error handling.

    Nothing raised inside a use case escapes ``execute``; every failure
    comes back as an error result.
    """

    # Used in "Error <operation>: ..." messages for unexpected failures.
    operation: str = "processing request"

    def __init__(self, uow: UnitOfWork, clock: Clock = utcnow):
        self.uow = uow
        self.clock = clock
        self.execution_start: Optional[datetime] = None
        self.execution_end: Optional[datetime] = None

    async def execute(self, request: T, context: IdentityContext) -> UseCaseResult[R]:
        """
        Execute the use case with proper error handling and logging.
        """
        self.execution_start = utcnow()

        try:
            # Validate input
            await self._validate_request(request)

            # Execute business logic
            result = await self._execute_business_logic(request, context)

            self.execution_end = utcnow()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            return UseCaseResult.success_result(
                result,
                metadata={
                    "execution_time_seconds": execution_time,
                    "executed_at": self.execution_end.isoformat()
                }
            )

        except Exception as exc:
            self.execution_end = utcnow()
            execution_time = (self.execution_end - self.execution_start).total_seconds()

            if isinstance(exc, (DomainException, PydanticValidationError)):
                logger.warning(f"{type(self).__name__} rejected: {exc}")
            else:
                logger.error(f"{type(self).__name__} failed unexpectedly: {exc}", exc_info=True)

            error_result = UseCaseResult.from_exception(exc, self.operation)
            error_result.metadata = {
                "execution_time_seconds": execution_time,
                "failed_at": self.execution_end.isoformat(),
                "exception_type": type(exc).__name__
            }

            return error_result

    def now(self) -> datetime:
        """Current instant from the injected clock."""
        return self.clock()

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        if hasattr(request, 'model_validate'):
            # Pydantic models
            request.model_validate(request.model_dump())
        elif hasattr(request, 'validate'):
            # Custom validation
            request.validate()

    @abstractmethod
    async def _execute_business_logic(self, request: T, context: IdentityContext) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).
    Runs the command inside the unit of work: commit on success, rollback otherwise.
    """

    async def _execute_business_logic(self, request: T, context: IdentityContext) -> R:
        try:
            result = await self._execute_command_logic(request, context)
            self.uow.commit()
            return result
        except Exception:
            self.uow.rollback()
            raise

    @abstractmethod
    async def _execute_command_logic(self, request: T, context: IdentityContext) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass


class PaginatedQueryUseCase(QueryUseCase[T, R]):
    """
    Base class for paginated query use cases.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock = utcnow, max_page_size: int = 100):
        super().__init__(uow, clock)
        self.max_page_size = max_page_size

    async def _validate_request(self, request: T) -> None:
        """Validate paginated request."""
        await super()._validate_request(request)

        if hasattr(request, 'page_size'):
            if request.page_size > self.max_page_size:
                raise ValidationError(f"Page size cannot exceed {self.max_page_size}", "page_size")
            if request.page_size < 1:
                raise ValidationError("Page size must be positive", "page_size")
