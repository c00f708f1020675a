"""
Read-only lookups for users and projects.
Both are owned by other modules; time tracking only needs their names.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
import uuid


class UserDirectory(ABC):
    """Resolves users of a tenant."""

    @abstractmethod
    def list_user_ids(self, tenant_id: uuid.UUID) -> List[uuid.UUID]:
        """IDs of every user in the tenant."""
        pass

    @abstractmethod
    def get_names(self, user_ids: Iterable[uuid.UUID], tenant_id: uuid.UUID) -> Dict[uuid.UUID, str]:
        """Display names keyed by user ID; unknown users are left out."""
        pass


class ProjectDirectory(ABC):
    """Resolves projects of a tenant."""

    @abstractmethod
    def get_name(self, project_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[str]:
        pass

    @abstractmethod
    def get_names(self, project_ids: Iterable[uuid.UUID], tenant_id: uuid.UUID) -> Dict[uuid.UUID, str]:
        """Project names keyed by project ID; unknown projects are left out."""
        pass
