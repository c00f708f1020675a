"""
Read-only user and project lookups over the shared tables.
"""

from typing import Dict, Iterable, List, Optional
import uuid

from sqlalchemy.orm import Session

from smartflow.domain.repositories.directory_repository import UserDirectory, ProjectDirectory
from smartflow.infrastructure.db.models import UserModel, ProjectModel


class SQLAlchemyUserDirectory(UserDirectory):

    def __init__(self, session: Session):
        self.session = session

    def list_user_ids(self, tenant_id: uuid.UUID) -> List[uuid.UUID]:
        rows = self.session.query(UserModel.id).filter(
            UserModel.tenant_id == tenant_id
        ).order_by(UserModel.last_name, UserModel.first_name).all()
        return [row.id for row in rows]

    def get_names(self, user_ids: Iterable[uuid.UUID], tenant_id: uuid.UUID) -> Dict[uuid.UUID, str]:
        ids = list(user_ids)
        if not ids:
            return {}
        users = self.session.query(UserModel).filter(
            UserModel.tenant_id == tenant_id,
            UserModel.id.in_(ids)
        ).all()
        return {user.id: user.full_name for user in users}


class SQLAlchemyProjectDirectory(ProjectDirectory):

    def __init__(self, session: Session):
        self.session = session

    def get_name(self, project_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[str]:
        return self.get_names([project_id], tenant_id).get(project_id)

    def get_names(self, project_ids: Iterable[uuid.UUID], tenant_id: uuid.UUID) -> Dict[uuid.UUID, str]:
        ids = list(project_ids)
        if not ids:
            return {}
        rows = self.session.query(ProjectModel.id, ProjectModel.name).filter(
            ProjectModel.tenant_id == tenant_id,
            ProjectModel.is_deleted.is_(False),
            ProjectModel.id.in_(ids)
        ).all()
        return {row.id: row.name for row in rows}
