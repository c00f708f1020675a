"""
Shared fixtures: an in-memory database per test, a controllable clock and caller identities.
"""

from datetime import datetime, timedelta
import uuid

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from smartflow.application.use_cases.base_use_case import IdentityContext
from smartflow.domain.models.time_category import TimeCategory
from smartflow.infrastructure.db.database import create_tables
from smartflow.infrastructure.db.models import UserModel, ProjectModel
from smartflow.infrastructure.db.unit_of_work import SQLAlchemyUnitOfWork


START = datetime(2024, 1, 15, 9, 0, 0)


class MutableClock:
    """Clock whose time only moves when a test says so."""

    def __init__(self, now: datetime = START):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def advance(self, minutes: int = 0, seconds: int = 0) -> datetime:
        self.current += timedelta(minutes=minutes, seconds=seconds)
        return self.current


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def uow(db_session):
    return SQLAlchemyUnitOfWork(db_session)


@pytest.fixture
def clock():
    return MutableClock()


@pytest.fixture
def tenant_id():
    return uuid.uuid4()


@pytest.fixture
def other_tenant_id():
    return uuid.uuid4()


@pytest.fixture
def user_id():
    return uuid.uuid4()


@pytest.fixture
def manager_id():
    return uuid.uuid4()


@pytest.fixture
def context(tenant_id, user_id):
    return IdentityContext(tenant_id=tenant_id, user_id=user_id)


@pytest.fixture
def manager_context(tenant_id, manager_id):
    return IdentityContext(tenant_id=tenant_id, user_id=manager_id)


@pytest.fixture
def foreign_context(other_tenant_id, user_id):
    """Same user ID, different tenant."""
    return IdentityContext(tenant_id=other_tenant_id, user_id=user_id)


@pytest.fixture
def people(db_session, tenant_id, user_id, manager_id):
    """Directory rows for the caller and a manager in the tenant."""
    db_session.add_all([
        UserModel(id=user_id, tenant_id=tenant_id, first_name="Ada", last_name="Lovelace"),
        UserModel(id=manager_id, tenant_id=tenant_id, first_name="Grace", last_name="Hopper"),
    ])
    db_session.commit()
    return {user_id: "Ada Lovelace", manager_id: "Grace Hopper"}


@pytest.fixture
def project_id(db_session, tenant_id):
    project_id = uuid.uuid4()
    db_session.add(ProjectModel(id=project_id, tenant_id=tenant_id, name="Website Redesign"))
    db_session.commit()
    return project_id


@pytest.fixture
def make_category(uow):
    """Persist a category directly, bypassing the use cases."""
    def make(tenant_id, name="Development", color="#3366FF", is_active=True) -> TimeCategory:
        category = TimeCategory(tenant_id=tenant_id, name=name, color=color, is_active=is_active)
        category.mark_as_created(START)
        uow.time_categories.save(category)
        uow.commit()
        return category
    return make


@pytest.fixture
def category(make_category, tenant_id):
    return make_category(tenant_id)
