"""
Account constraint validators.

Each constraint checks an account against the account repository, e.g. when
registering a user the account must be unique, and when modifying one it must
exist and belong to the logged-in principal.

Validators accept any object exposing ``id``, ``username``, ``email`` and
``telephone`` attributes: request payloads as well as stored accounts.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Type

from ..auth import ANONYMOUS, Principal
from ...repositories.interfaces import AccountRepository
from ...utils.logging_config import get_logger

logger = get_logger('validation')


@dataclass(frozen=True)
class AccountViolation:
    """A single failed account constraint."""

    constraint: str
    message: str


class AccountValidationError(Exception):
    """Raised when an account fails one or more constraints."""

    def __init__(self, violations: List[AccountViolation]):
        self.violations = violations
        super().__init__("; ".join(v.message for v in violations))


class AccountValidation:
    """Base constraint: holds the repository and evaluates ``predicate``."""

    message = "Account is invalid"

    def __init__(self, repository: AccountRepository, principal: Principal = ANONYMOUS):
        self.repository = repository
        self.principal = principal

    @classmethod
    def constraint_name(cls) -> str:
        return cls.__name__

    async def predicate(self, account: Any) -> bool:
        return True

    async def is_valid(self, account: Any) -> bool:
        """Return whether ``account`` satisfies this constraint."""
        return await self.predicate(account)


class ExistsAccount(AccountValidation):
    """The account must already be stored."""

    message = "Account does not exist"

    async def predicate(self, account: Any) -> bool:
        return await self.repository.exists_by_id(account.id)


class AuthenticatedAccount(AccountValidation):
    """The account must be the one the current principal is logged in as."""

    message = "Not the currently logged-in account"

    async def predicate(self, account: Any) -> bool:
        if self.principal.is_anonymous:
            return False
        return account.id is not None and account.id == self.principal.id


class UniqueAccount(AccountValidation):
    """No stored account may share username, email or telephone."""

    message = "Username, email and telephone must not duplicate an existing account"

    async def predicate(self, account: Any) -> bool:
        return not await self.repository.exists_by_username_or_email_or_telephone(
            account.username, account.email, account.telephone
        )


class NotConflictAccount(AccountValidation):
    """Username, email and telephone may only collide with the account itself."""

    message = "Username, email or telephone conflicts with an existing account"

    async def predicate(self, account: Any) -> bool:
        matches = await self.repository.find_by_username_or_email_or_telephone(
            account.username, account.email, account.telephone
        )
        return not matches or (len(matches) == 1 and matches[0].id == account.id)


async def validate_account(
    account: Any,
    constraints: Sequence[Type[AccountValidation]],
    repository: AccountRepository,
    principal: Optional[Principal] = None,
) -> None:
    """
    Run ``constraints`` against ``account`` in declaration order.

    Raises:
        AccountValidationError: listing every constraint that failed
    """
    principal = principal or ANONYMOUS
    violations = []
    for constraint in constraints:
        validator = constraint(repository, principal)
        if not await validator.is_valid(account):
            violations.append(
                AccountViolation(constraint.constraint_name(), constraint.message)
            )

    if violations:
        logger.info(
            f"Account '{getattr(account, 'username', None)}' failed constraints: "
            f"{', '.join(v.constraint for v in violations)}"
        )
        raise AccountValidationError(violations)
