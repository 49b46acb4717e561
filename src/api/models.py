"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.domain.models import Account

MAX_PASSWORD_BYTES = 72
MAX_PHONE_NUMBER = 2**63 - 1  # BIGINT column


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: str = Field(..., min_length=1, max_length=200, description="Display name")
    email: EmailStr
    password: str = Field(
        ..., min_length=8, max_length=72, description="User password (8 characters to 72 bytes)"
    )
    phone_number: int = Field(
        ..., gt=0, le=MAX_PHONE_NUMBER, description="Phone number, unique per account"
    )

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        """bcrypt only accepts up to 72 bytes, so multibyte characters count extra."""
        if len(v.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    message: str
    activation_token: str
    expires_in_seconds: int


class ActivateRequest(BaseModel):
    """Request model for account activation."""

    activation_token: str = Field(..., min_length=1, description="Token returned by /register")
    activation_code: str = Field(
        ...,
        min_length=4,
        max_length=4,
        pattern=r"^\d{4}$",
        description="4-digit activation code",
    )


class AccountResponse(BaseModel):
    """Public view of an account. Never includes the password hash."""

    id: str
    name: str
    email: str
    phone_number: int

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            phone_number=account.phone_number,
        )


class ActivateResponse(BaseModel):
    """Response model for successful activation."""

    message: str
    account: AccountResponse


class LoginRequest(BaseModel):
    """Request model for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginError(BaseModel):
    message: str


class LoginResponse(BaseModel):
    """
    Response model for login.

    Failure bodies are identical for unknown email and wrong password.
    """

    account: AccountResponse | None = None
    access_token: str | None = None
    refresh_token: str | None = None
    error: LoginError | None = None


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenPairResponse(BaseModel):
    """Response model for a refreshed session."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class LogoutResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
