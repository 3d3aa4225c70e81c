"""SQLAlchemy models for the bookstore."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint

from .database import Base


class Account(Base):
    """A registered bookstore user account."""

    __tablename__ = "account"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False)
    password = Column(String(255), nullable=False)  # "<salt_hex>$<hash_hex>"
    name = Column(String(50), nullable=True)
    avatar = Column(String(255), nullable=True)
    telephone = Column(String(20), nullable=False)
    email = Column(String(100), nullable=False)
    location = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_account_username"),
        UniqueConstraint("email", name="uq_account_email"),
        UniqueConstraint("telephone", name="uq_account_telephone"),
    )

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, username='{self.username}')>"
