"""
SQLAlchemy unit of work.
One session per request; every repository shares it.
"""

import logging

from sqlalchemy.orm import Session

from smartflow.domain.repositories.unit_of_work import UnitOfWork
from smartflow.infrastructure.repositories import (
    SQLAlchemyTimeCategoryRepository,
    SQLAlchemyTimeEntryRepository,
    SQLAlchemyTrackingSessionRepository,
    SQLAlchemyTimesheetRepository,
    SQLAlchemyUserDirectory,
    SQLAlchemyProjectDirectory,
)


logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """Unit of work backed by a single SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session
        self.time_categories = SQLAlchemyTimeCategoryRepository(session)
        self.time_entries = SQLAlchemyTimeEntryRepository(session)
        self.tracking_sessions = SQLAlchemyTrackingSessionRepository(session)
        self.timesheets = SQLAlchemyTimesheetRepository(session)
        self.users = SQLAlchemyUserDirectory(session)
        self.projects = SQLAlchemyProjectDirectory(session)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        logger.debug("Rolling back unit of work")
        self.session.rollback()
