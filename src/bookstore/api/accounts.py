"""Account management API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError

from ..auth.dependencies import get_current_account
from ..auth.security import encode_password
from ..domain.account.validation import (
    AuthenticatedAccount,
    ExistsAccount,
    NotConflictAccount,
    UniqueAccount,
)
from ..domain.auth import AuthenticAccount
from ..repositories.dependencies import get_account_repository
from ..repositories.interfaces import AccountRepository
from ..utils.logging_config import get_logger
from .middleware import ProblemDetailsException
from .schemas import (
    AccountPayload,
    AccountResponse,
    AccountValidationProblem,
    CommonResponse,
    ProblemDetails,
)
from .validation import validated_account

logger = get_logger('api')

router = APIRouter(prefix="/restful/accounts", tags=["accounts"])


def _conflict() -> ProblemDetailsException:
    return ProblemDetailsException(
        status_code=status.HTTP_409_CONFLICT,
        title="Conflict",
        detail="Username, email or telephone is already in use",
    )


@router.get(
    "/{username}",
    response_model=AccountResponse,
    responses={
        200: {"description": "Account retrieved successfully"},
        404: {"model": ProblemDetails, "description": "Account not found"},
    },
)
async def get_account(
    username: str,
    account_repo: AccountRepository = Depends(get_account_repository),
) -> AccountResponse:
    """Get an account by username."""
    account = await account_repo.get_by_username(username)
    if not account:
        raise ProblemDetailsException(
            status_code=status.HTTP_404_NOT_FOUND,
            title="Account Not Found",
            detail=f"Account '{username}' does not exist",
        )
    return AccountResponse.model_validate(account)


@router.post(
    "",
    response_model=CommonResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Account created successfully"},
        409: {"model": ProblemDetails, "description": "Concurrent duplicate registration"},
        422: {"model": AccountValidationProblem, "description": "Account is not unique"},
    },
)
async def create_account(
    account: AccountPayload = Depends(validated_account(UniqueAccount)),
    account_repo: AccountRepository = Depends(get_account_repository),
) -> CommonResponse:
    """
    Register a new account.

    Username, email and telephone must all be unused. A password is required.
    """
    if not account.password:
        raise ProblemDetailsException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            title="Validation Error",
            detail="Password is required when registering",
        )

    try:
        created = await account_repo.create(
            username=account.username,
            password=encode_password(account.password),
            email=account.email,
            telephone=account.telephone,
            name=account.name,
            avatar=account.avatar,
            location=account.location,
        )
    except IntegrityError:
        await account_repo.rollback()
        raise _conflict()

    logger.info(f"Registered account {created.id} ({created.username})")
    return CommonResponse(message="Account created")


@router.put(
    "",
    response_model=CommonResponse,
    responses={
        200: {"description": "Account updated successfully"},
        401: {"model": ProblemDetails, "description": "Authentication required"},
        409: {"model": ProblemDetails, "description": "Concurrent conflicting update"},
        422: {
            "model": AccountValidationProblem,
            "description": "Account missing, not owned by caller, or conflicting",
        },
    },
)
async def update_account(
    current_account: AuthenticAccount = Depends(get_current_account),
    account: AccountPayload = Depends(
        validated_account(ExistsAccount, AuthenticatedAccount, NotConflictAccount)
    ),
    account_repo: AccountRepository = Depends(get_account_repository),
) -> CommonResponse:
    """
    Modify the logged-in account.

    The account must exist, must be the caller's own, and its username, email
    and telephone may only collide with itself. The payload replaces the stored
    account: omitted name, avatar or location are cleared. A blank password
    keeps the current one.
    """
    stored = await account_repo.get_by_id(account.id)
    if stored is None:
        # Deleted between validation and update
        raise ProblemDetailsException(
            status_code=status.HTTP_404_NOT_FOUND,
            title="Account Not Found",
            detail=f"Account {account.id} does not exist",
        )

    changes = account.model_dump(exclude={"id", "password"})
    if account.password:
        changes["password"] = encode_password(account.password)

    try:
        await account_repo.update(stored, **changes)
    except IntegrityError:
        await account_repo.rollback()
        raise _conflict()

    logger.info(f"Account {current_account.id} updated by {current_account.username}")
    return CommonResponse(message="Account updated")
