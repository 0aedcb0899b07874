"""Authentication request schemas.

Pydantic models for request validation. Kept separate from domain
entities; invalid input raises ``pydantic.ValidationError`` before any
handler runs.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from authcore.domain.enums import UserRole


# =============================================================================
# Registration
# =============================================================================


class RegisterRequest(BaseModel):
    """Request schema for registration."""

    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Unique login name",
        examples=["alice"],
    )
    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["alice@example.com"],
    )
    password: str = Field(
        ...,
        min_length=6,
        max_length=128,
        description="Password (at least 6 characters)",
        examples=["s3cret!"],
    )
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    role: UserRole | None = Field(
        default=None,
        description="Requested role (defaults to user)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "email": "alice@example.com",
                "password": "s3cret!",
            }
        },
    )


# =============================================================================
# Login
# =============================================================================


class LoginRequest(BaseModel):
    """Request schema for login by username or email."""

    username: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Username or email address",
        examples=["alice", "alice@example.com"],
    )
    password: str = Field(..., min_length=1, max_length=128)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "alice",
                "password": "s3cret!",
            }
        }
    )
