"""SQLAlchemy concrete implementations of repository interfaces."""

from typing import List, Optional

from sqlalchemy import exists, or_
from sqlalchemy.orm import Session

from .interfaces import AccountRepository
from ..db.models import Account


class BaseSQLAlchemyRepository:
    """Base SQLAlchemy repository implementation."""

    def __init__(self, session: Session):
        self._session = session

    async def save(self, entity) -> None:
        """Save an entity to the repository."""
        self._session.add(entity)

    async def delete(self, entity) -> None:
        """Delete an entity from the repository."""
        self._session.delete(entity)

    async def commit(self) -> None:
        """Commit the current transaction."""
        self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        self._session.rollback()


def _identity_clause(
    username: Optional[str], email: Optional[str], telephone: Optional[str]
):
    """Build ``username = ? OR email = ? OR telephone = ?`` over non-null values."""
    conditions = []
    if username is not None:
        conditions.append(Account.username == username)
    if email is not None:
        conditions.append(Account.email == email)
    if telephone is not None:
        conditions.append(Account.telephone == telephone)
    return or_(*conditions) if conditions else None


class SQLAlchemyAccountRepository(BaseSQLAlchemyRepository, AccountRepository):
    """SQLAlchemy implementation of AccountRepository."""

    async def get_by_id(self, account_id: int) -> Optional[Account]:
        """Get an account by ID."""
        return self._session.query(Account).filter(Account.id == account_id).first()

    async def get_by_username(self, username: str) -> Optional[Account]:
        """Get an account by username."""
        return (
            self._session.query(Account).filter(Account.username == username).first()
        )

    async def exists_by_id(self, account_id: Optional[int]) -> bool:
        """Check whether an account with this ID exists."""
        if account_id is None:
            return False
        return self._session.query(exists().where(Account.id == account_id)).scalar()

    async def exists_by_username_or_email_or_telephone(
        self,
        username: Optional[str],
        email: Optional[str],
        telephone: Optional[str],
    ) -> bool:
        """Check whether any account shares username, email or telephone."""
        clause = _identity_clause(username, email, telephone)
        if clause is None:
            return False
        return self._session.query(exists().where(clause)).scalar()

    async def find_by_username_or_email_or_telephone(
        self,
        username: Optional[str],
        email: Optional[str],
        telephone: Optional[str],
    ) -> List[Account]:
        """Get every account sharing username, email or telephone."""
        clause = _identity_clause(username, email, telephone)
        if clause is None:
            return []
        return self._session.query(Account).filter(clause).order_by(Account.id).all()

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
            username=username,
            password=password,
            email=email,
            telephone=telephone,
            name=name,
            avatar=avatar,
            location=location,
        )
        await self.save(account)
        await self.commit()
        self._session.refresh(account)
        return account

    async def update(self, account: Account, **fields) -> Account:
        """Apply field changes to an existing account and persist them."""
        for key, value in fields.items():
            setattr(account, key, value)
        await self.save(account)
        await self.commit()
        self._session.refresh(account)
        return account
