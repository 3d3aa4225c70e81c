"""JWT-based authentication with token refresh."""

import jwt
from datetime import datetime, timezone, timedelta
from typing import Dict, Any, Optional, Tuple
from uuid import uuid4

from fastapi import HTTPException, status

from ..config import get_config


class JWTTokenManager:
    """Manages JWT access and refresh tokens for account sessions."""

    def __init__(self, secret_key: Optional[str] = None):
        """Initialize JWT token manager with configuration."""
        config = get_config()
        self.secret_key = secret_key or config.app.jwt_secret_key
        self.algorithm = "HS256"
        self.access_token_expires_minutes = config.app.jwt_access_token_expires_minutes
        self.refresh_token_expires_days = config.app.jwt_refresh_token_expires_days

    def _encode(self, claims: Dict[str, Any]) -> str:
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def create_tokens(
        self,
        account_id: int,
        username: str,
        additional_claims: Optional[Dict[str, Any]] = None,
    ) -> Tuple[str, str, datetime, datetime]:
        """
        Create access and refresh token pair.

        Args:
            account_id: ID of the account
            username: Username of the account
            additional_claims: Optional additional claims to include

        Returns:
            Tuple of (access_token, refresh_token, access_expires_at, refresh_expires_at)
        """
        now = datetime.now(timezone.utc)
        jti = str(uuid4())  # Unique token ID

        access_expires_at = now + timedelta(minutes=self.access_token_expires_minutes)
        access_payload = {
            "sub": str(account_id),
            "username": username,
            "iat": now,
            "exp": access_expires_at,
            "jti": jti,
            "type": "access",
        }

        if additional_claims:
            access_payload.update(additional_claims)

        refresh_expires_at = now + timedelta(days=self.refresh_token_expires_days)
        refresh_payload = {
            "sub": str(account_id),
            "username": username,
            "iat": now,
            "exp": refresh_expires_at,
            "jti": jti,
            "type": "refresh",
        }

        return (
            self._encode(access_payload),
            self._encode(refresh_payload),
            access_expires_at,
            refresh_expires_at,
        )

    def _verify(self, token: str, token_type: str) -> Dict[str, Any]:
        label = token_type.capitalize()
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"{label} token has expired",
                headers={"WWW-Authenticate": "Bearer"},
            )
        except jwt.InvalidTokenError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"Invalid {token_type} token",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if payload.get("type") != token_type:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token type",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return payload

    def verify_access_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode access token.

        Raises:
            HTTPException: If token is invalid, expired, or wrong type
        """
        return self._verify(token, "access")

    def verify_refresh_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode refresh token.

        Raises:
            HTTPException: If token is invalid, expired, or wrong type
        """
        return self._verify(token, "refresh")

    def refresh_access_token(self, refresh_token: str) -> Tuple[str, datetime]:
        """
        Create new access token from valid refresh token.

        Returns:
            Tuple of (new_access_token, expires_at)
        """
        payload = self.verify_refresh_token(refresh_token)

        now = datetime.now(timezone.utc)
        access_expires_at = now + timedelta(minutes=self.access_token_expires_minutes)

        access_payload = {
            "sub": payload["sub"],
            "username": payload["username"],
            "iat": now,
            "exp": access_expires_at,
            "jti": payload["jti"],  # Keep same JTI for token family
            "type": "access",
        }

        return self._encode(access_payload), access_expires_at

    def extract_account_info(self, token: str) -> Tuple[int, str]:
        """
        Extract account information from valid access token.

        Returns:
            Tuple of (account_id, username)
        """
        payload = self.verify_access_token(token)
        try:
            return int(payload["sub"]), payload["username"]
        except (KeyError, ValueError):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or malformed token",
                headers={"WWW-Authenticate": "Bearer"},
            )


jwt_manager = JWTTokenManager()
