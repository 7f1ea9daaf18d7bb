"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from storefront.shared.schemas import ApiModel


class RegisterRequest(ApiModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "email": "jane@example.com",
                    "password": "correct-horse-battery",
                    "firstName": "Jane",
                    "lastName": "Doe",
                }
            ]
        },
    )

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class LoginRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class VerifyEmailRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    token: str = Field(..., max_length=128)


class ForgotPasswordRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., max_length=254)


class ResetPasswordRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    token: str = Field(..., max_length=128)
    password: str = Field(..., max_length=128)


class UserResponse(ApiModel):
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str
    is_verified: bool
    created_at: datetime | None = None


class AuthResponse(ApiModel):
    user: UserResponse
    token: str
    refresh_token: str


class RefreshRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    refresh_token: str = Field(..., max_length=2048)


class TokenResponse(ApiModel):
    token: str


class UpdateProfileRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: str | None = Field(None, max_length=254)


class ChangeRoleRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    role: str


class MessageResponse(ApiModel):
    message: str
