"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from ..auth.jwt_auth import jwt_manager
from ..auth.security import matches_password
from ..repositories.dependencies import get_account_repository
from ..repositories.interfaces import AccountRepository
from ..utils.logging_config import get_logger
from .schemas import (
    JWTTokenResponse,
    LoginRequest,
    ProblemDetails,
    TokenRefreshRequest,
    TokenRefreshResponse,
)

logger = get_logger('auth')

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=JWTTokenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Login successful"},
        401: {"model": ProblemDetails, "description": "Invalid username or password"},
        422: {"model": ProblemDetails, "description": "Validation error"},
    },
)
async def login(
    login_data: LoginRequest,
    account_repo: AccountRepository = Depends(get_account_repository),
) -> JWTTokenResponse:
    """
    Authenticate an account and issue JWT access and refresh tokens.

    Unknown usernames and wrong passwords produce the same response.
    """
    account = await account_repo.get_by_username(login_data.username)

    if not account or not matches_password(login_data.password, account.password):
        logger.warning(f"Failed login attempt for '{login_data.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token, refresh_token, access_expires_at, refresh_expires_at = jwt_manager.create_tokens(
        account_id=account.id,
        username=account.username,
    )

    logger.info(f"Account {account.id} logged in")
    return JWTTokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        access_expires_at=access_expires_at,
        refresh_expires_at=refresh_expires_at,
        account_id=account.id,
        username=account.username,
    )


@router.post(
    "/refresh",
    response_model=TokenRefreshResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Token refresh successful"},
        401: {"model": ProblemDetails, "description": "Invalid or expired refresh token"},
        422: {"model": ProblemDetails, "description": "Validation error"},
    },
)
async def refresh_token(refresh_data: TokenRefreshRequest) -> TokenRefreshResponse:
    """Obtain a new access token from a valid refresh token."""
    new_access_token, expires_at = jwt_manager.refresh_access_token(refresh_data.refresh_token)

    return TokenRefreshResponse(
        access_token=new_access_token,
        expires_at=expires_at,
    )
