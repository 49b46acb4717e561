"""
Domain models - Immutable value objects for the account lifecycle.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AuthFailure(Enum):
    """Reason attached to a failed login. Intentionally a single value."""

    INVALID_CREDENTIALS = "invalid_credentials"


@dataclass(frozen=True)
class PendingRegistration:
    """
    Registration data awaiting activation.

    Never persisted: it travels inside a signed activation token until the
    user proves possession of the activation code.
    """

    name: str
    email: str
    hashed_password: str
    phone_number: int


@dataclass(frozen=True)
class Account:
    """Durable user account, created only by successful activation."""

    id: str
    name: str
    email: str
    hashed_password: str
    phone_number: int
    created_at: datetime | None = None


@dataclass(frozen=True)
class ActivationTicket:
    """Signed activation token plus the code that must be sent out of band."""

    token: str
    activation_code: str


@dataclass(frozen=True)
class VerifiedActivation:
    """Contents of an activation token whose signature and expiry checked out."""

    registration: PendingRegistration
    activation_code: str


@dataclass(frozen=True)
class SessionCredential:
    """Access/refresh token pair issued on login or refresh."""

    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a registration. Carries the token, never the code."""

    activation_token: str
    expires_in_seconds: int


@dataclass(frozen=True)
class LoginResult:
    """
    Outcome of a login attempt.

    Failures always have the same shape (no account, no tokens,
    INVALID_CREDENTIALS) whether the email is unknown or the password wrong.
    """

    account: Account | None
    access_token: str | None
    refresh_token: str | None
    error: AuthFailure | None = None

    @classmethod
    def failure(cls) -> "LoginResult":
        return cls(
            account=None,
            access_token=None,
            refresh_token=None,
            error=AuthFailure.INVALID_CREDENTIALS,
        )

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class LogoutResult:
    message: str = "Logged out"
