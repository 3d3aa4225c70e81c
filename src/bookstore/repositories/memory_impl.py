"""In-memory implementations of repository interfaces for testing."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from .interfaces import AccountRepository
from ..db.models import Account


class BaseMemoryRepository:
    """Base in-memory repository implementation."""

    async def save(self, entity) -> None:
        """Save an entity to the repository."""
        # In memory implementation doesn't need explicit saves
        pass

    async def delete(self, entity) -> None:
        """Delete an entity from the repository."""
        # Handled by specific implementations
        pass

    async def commit(self) -> None:
        """Commit the current transaction."""
        # In memory - changes are immediate
        pass

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        # In memory - no rollback needed for simple case
        pass


class MemoryAccountRepository(BaseMemoryRepository, AccountRepository):
    """In-memory implementation of AccountRepository."""

    def __init__(self):
        super().__init__()
        self._accounts: Dict[int, Account] = {}
        self._next_id = 1

    def _matches(
        self,
        account: Account,
        username: Optional[str],
        email: Optional[str],
        telephone: Optional[str],
    ) -> bool:
        return (
            (username is not None and account.username == username)
            or (email is not None and account.email == email)
            or (telephone is not None and account.telephone == telephone)
        )

    async def get_by_id(self, account_id: int) -> Optional[Account]:
        """Get an account by ID."""
        return self._accounts.get(account_id)

    async def get_by_username(self, username: str) -> Optional[Account]:
        """Get an account by username."""
        for account in self._accounts.values():
            if account.username == username:
                return account
        return None

    async def exists_by_id(self, account_id: Optional[int]) -> bool:
        """Check whether an account with this ID exists."""
        return account_id is not None and account_id in self._accounts

    async def exists_by_username_or_email_or_telephone(
        self,
        username: Optional[str],
        email: Optional[str],
        telephone: Optional[str],
    ) -> bool:
        """Check whether any account shares username, email or telephone."""
        return any(
            self._matches(account, username, email, telephone)
            for account in self._accounts.values()
        )

    async def find_by_username_or_email_or_telephone(
        self,
        username: Optional[str],
        email: Optional[str],
        telephone: Optional[str],
    ) -> List[Account]:
        """Get every account sharing username, email or telephone."""
        return [
            account
            for account_id, account in sorted(self._accounts.items())
            if self._matches(account, username, email, telephone)
        ]

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
        """Create a new account."""
        account = Account(
            id=self._next_id,
            username=username,
            password=password,
            email=email,
            telephone=telephone,
            name=name,
            avatar=avatar,
            location=location,
            created_at=datetime.now(timezone.utc),
        )
        self._accounts[account.id] = account
        self._next_id += 1
        return account

    async def update(self, account: Account, **fields) -> Account:
        """Apply field changes to an existing account."""
        for key, value in fields.items():
            setattr(account, key, value)
        self._accounts[account.id] = account
        return account

    async def delete(self, entity) -> None:
        """Delete an account."""
        self._accounts.pop(entity.id, None)
