"""Time Category repository interface.
Defines the contract for time category persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple
import uuid

from smartflow.domain.models.time_category import TimeCategory


class TimeCategoryRepository(ABC):
    """
    Repository interface for TimeCategory entity.
    Every lookup is scoped to a tenant.
    """

    @abstractmethod
    def save(self, category: TimeCategory) -> TimeCategory:
        """
        Save a time category entity.
        Inserts new entities and updates existing ones.
        """
        pass

    @abstractmethod
    def get_by_id(self, category_id: uuid.UUID, tenant_id: uuid.UUID) -> Optional[TimeCategory]:
        """
        Find a category by its ID within a tenant.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def get_many(self, category_ids: Iterable[uuid.UUID], tenant_id: uuid.UUID) -> List[TimeCategory]:
        """
        Find several categories at once, including deactivated ones.
        Unknown IDs are skipped.
        """
        pass

    @abstractmethod
    def get_active_by_name(
        self,
        name: str,
        tenant_id: uuid.UUID,
        exclude_id: Optional[uuid.UUID] = None
    ) -> Optional[TimeCategory]:
        """
        Find an active category with exactly this name.
        Optionally ignore one category (used when renaming).
        """
        pass

    @abstractmethod
    def list_active(self, tenant_id: uuid.UUID) -> List[TimeCategory]:
        """List all active categories of a tenant, ordered by name."""
        pass

    @abstractmethod
    def list_paged(
        self,
        tenant_id: uuid.UUID,
        page: int,
        page_size: int,
        search: Optional[str] = None
    ) -> Tuple[List[TimeCategory], int]:
        """
        List active categories a page at a time.
        Returns the page items and the total count.
        """
        pass
