"""Pydantic models for API request/response validation."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class BaseResponse(BaseModel):
    """Base response model with common fields."""

    model_config = ConfigDict(from_attributes=True)


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs."""

    type: str = Field(description="A URI reference that identifies the problem type")
    title: str = Field(
        description="A short, human-readable summary of the problem type"
    )
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(
        None, description="A human-readable explanation specific to this occurrence"
    )
    instance: Optional[str] = Field(
        None, description="A URI reference that identifies the specific occurrence"
    )


class ConstraintViolation(BaseModel):
    """A failed account constraint inside a validation problem."""

    constraint: str
    message: str


class AccountValidationProblem(ProblemDetails):
    """Problem Details for account constraint failures."""

    errors: List[ConstraintViolation] = Field(default_factory=list)


# Authentication schemas
class LoginRequest(BaseModel):
    """Schema for login request."""

    username: str = Field(description="Account username", min_length=1, max_length=50)
    password: str = Field(description="Account password", min_length=1)


class JWTTokenResponse(BaseModel):
    """Schema for JWT token response."""

    access_token: str = Field(description="JWT access token")
    refresh_token: str = Field(description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    access_expires_at: datetime = Field(description="Access token expiration timestamp")
    refresh_expires_at: datetime = Field(
        description="Refresh token expiration timestamp"
    )
    account_id: int = Field(description="ID of the account")
    username: str = Field(description="Username of the account")


class TokenRefreshRequest(BaseModel):
    """Schema for token refresh request."""

    refresh_token: str = Field(description="JWT refresh token")


class TokenRefreshResponse(BaseModel):
    """Schema for token refresh response."""

    access_token: str = Field(description="New JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(description="Access token expiration timestamp")


# Account schemas
class AccountPayload(BaseModel):
    """Account submitted for registration or modification."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: Optional[int] = Field(None, description="Account ID (required for updates)")
    username: str = Field(description="Username", min_length=1, max_length=50)
    password: Optional[str] = Field(
        None, description="Plain password; blank keeps the current one on update", max_length=100
    )
    name: Optional[str] = Field(None, description="Display name", max_length=50)
    avatar: Optional[str] = Field(None, description="Avatar URL", max_length=255)
    telephone: str = Field(
        description="Telephone number", min_length=1, max_length=20, pattern=r"^[0-9+\-\s]+$"
    )
    email: EmailStr = Field(description="Email address")
    location: Optional[str] = Field(None, description="Shipping location", max_length=255)


class AccountResponse(BaseResponse):
    """Account as returned by the API. The password is never included."""

    id: int
    username: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    telephone: str
    email: str
    location: Optional[str] = None
    created_at: datetime


class CommonResponse(BaseModel):
    """Plain acknowledgement for write operations."""

    code: int = Field(default=0, description="0 on success")
    message: str = Field(default="operation succeeded")
