"""Abstract repository interfaces for data access layer."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..db.models import Account


class BaseRepository(ABC):
    """Base repository interface with common operations."""

    @abstractmethod
    async def save(self, entity) -> None:
        """Save an entity to the repository."""
        pass

    @abstractmethod
    async def delete(self, entity) -> None:
        """Delete an entity from the repository."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current transaction."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the current transaction."""
        pass


class AccountRepository(BaseRepository):
    """Repository interface for Account entities.

    The ``*_or_*`` lookups match an account when any one of the given fields
    is equal; a ``None`` field never matches.
    """

    @abstractmethod
    async def get_by_id(self, account_id: int) -> Optional[Account]:
        """Get an account by ID."""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[Account]:
        """Get an account by username."""
        pass

    @abstractmethod
    async def exists_by_id(self, account_id: Optional[int]) -> bool:
        """Check whether an account with this ID exists."""
        pass

    @abstractmethod
    async def exists_by_username_or_email_or_telephone(
        self,
        username: Optional[str],
        email: Optional[str],
        telephone: Optional[str],
    ) -> bool:
        """Check whether any account shares username, email or telephone."""
        pass

    @abstractmethod
    async def find_by_username_or_email_or_telephone(
        self,
        username: Optional[str],
        email: Optional[str],
        telephone: Optional[str],
    ) -> List[Account]:
        """Get every account sharing username, email or telephone."""
        pass

    @abstractmethod
    async def create(
        self,
        username: str,
        password: str,
        email: str,
        telephone: str,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
        location: Optional[str] = None,
    ) -> Account:
        """Create a new account. ``password`` must already be hashed."""
        pass

    @abstractmethod
    async def update(self, account: Account, **fields) -> Account:
        """Apply field changes to an existing account and persist them."""
        pass
