"""FastAPI binding for account constraint validation."""

from typing import Callable, Type

from fastapi import Depends, status

from ..auth.dependencies import get_current_principal
from ..domain.account.validation import (
    AccountValidation,
    AccountValidationError,
    validate_account,
)
from ..domain.auth import Principal
from ..repositories.dependencies import get_account_repository
from ..repositories.interfaces import AccountRepository
from .middleware import ProblemDetailsException
from .schemas import AccountPayload


def validated_account(*constraints: Type[AccountValidation]) -> Callable:
    """
    Build a dependency yielding the request's account payload after it passed
    every constraint in ``constraints``.

    Failures are reported as a 422 problem listing each violated constraint.

    Example:
        account: AccountPayload = Depends(validated_account(UniqueAccount))
    """

    async def dependency(
        account: AccountPayload,
        repository: AccountRepository = Depends(get_account_repository),
        principal: Principal = Depends(get_current_principal),
    ) -> AccountPayload:
        try:
            await validate_account(account, constraints, repository, principal)
        except AccountValidationError as exc:
            raise ProblemDetailsException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                title="Validation Error",
                detail=str(exc),
                errors=[
                    {"constraint": v.constraint, "message": v.message}
                    for v in exc.violations
                ],
            )
        return account

    return dependency
