"""Authentication dependencies for FastAPI."""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .jwt_auth import jwt_manager
from ..domain.auth import ANONYMOUS, AuthenticAccount, Principal
from ..utils.logging_config import get_logger

logger = get_logger('auth')

# Missing credentials resolve to the anonymous principal instead of a 403
security = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """
    Resolve the principal of the current request.

    Requests without a Bearer token act as the anonymous principal. A token
    that is present but invalid is rejected with 401 rather than downgraded.
    """
    if credentials is None:
        return ANONYMOUS

    account_id, username = jwt_manager.extract_account_info(credentials.credentials)
    return AuthenticAccount(id=account_id, username=username)


def get_current_account(
    principal: Principal = Depends(get_current_principal),
) -> AuthenticAccount:
    """
    Require an authenticated principal.

    This dependency can be used in route handlers that are only open to
    logged-in accounts.
    """
    if principal.is_anonymous:
        logger.debug("Rejected anonymous request to an authenticated endpoint")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal
