"""
Shared FastAPI dependencies for the routers.
"""

from typing import Annotated, Type, TypeVar

from fastapi import Depends, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from smartflow.application.use_cases.base_use_case import ErrorKind
from smartflow.infrastructure.db.database import get_db
from smartflow.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork
from smartflow.infrastructure.web.middleware.error_handler import BusinessException


DTO = TypeVar('DTO')


def get_unit_of_work(session: Annotated[Session, Depends(get_db)]) -> SQLAlchemyUnitOfWork:
    """Dependency to get the unit of work for the request."""
    return SQLAlchemyUnitOfWork(session)


def build_request(dto_class: Type[DTO], **fields) -> DTO:
    """Build a request DTO from path and query values; invalid input becomes a 422."""
    try:
        return dto_class(**{key: value for key, value in fields.items() if value is not None})
    except PydanticValidationError as e:
        message = "; ".join(error["msg"] for error in e.errors())
        raise BusinessException(
            message=message,
            error_code=ErrorKind.VALIDATION_ERROR.value,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY
        )
