"""Dependency injection for repository layer."""

from fastapi import Depends
from sqlalchemy.orm import Session

from ..db.database import get_db
from .interfaces import AccountRepository
from .sqlalchemy_impl import SQLAlchemyAccountRepository


def get_account_repository(db: Session = Depends(get_db)) -> AccountRepository:
    """Get Account repository instance."""
    return SQLAlchemyAccountRepository(db)
