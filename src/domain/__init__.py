"""
Domain layer - Pure business logic with zero framework imports.

This package contains the account lifecycle: registration into a signed
pending-registration token, activation into a durable account, and
login into an access/refresh token pair. It defines its own port
interfaces for infrastructure abstraction.
"""

from .activation import ActivationService
from .authentication import AuthService
from .exceptions import (
    AccountAlreadyActivated,
    AccountError,
    ActivationError,
    AuthenticationError,
    CodeMismatch,
    DirectoryUnavailable,
    DuplicateAccount,
    DuplicateEmail,
    DuplicatePhone,
    ExpiredToken,
    HashingFailure,
    InfrastructureError,
    InvalidCredentials,
    InvalidPassword,
    InvalidToken,
    RegistrationError,
    SigningKeyMissing,
    TokenError,
)
from .models import (
    Account,
    ActivationTicket,
    AuthFailure,
    LoginResult,
    LogoutResult,
    PendingRegistration,
    RegistrationResult,
    SessionCredential,
    VerifiedActivation,
)
from .ports import (
    AccountDirectory,
    ActivationTokenCodec,
    Notifier,
    PasswordHasher,
    SessionTokenIssuer,
    TokenKind,
)
from .registration import RegistrationService

__all__ = [
    "Account",
    "AccountAlreadyActivated",
    "AccountDirectory",
    "AccountError",
    "ActivationError",
    "ActivationService",
    "ActivationTicket",
    "ActivationTokenCodec",
    "AuthFailure",
    "AuthService",
    "AuthenticationError",
    "CodeMismatch",
    "DirectoryUnavailable",
    "DuplicateAccount",
    "DuplicateEmail",
    "DuplicatePhone",
    "ExpiredToken",
    "HashingFailure",
    "InfrastructureError",
    "InvalidCredentials",
    "InvalidPassword",
    "InvalidToken",
    "LoginResult",
    "LogoutResult",
    "Notifier",
    "PasswordHasher",
    "PendingRegistration",
    "RegistrationError",
    "RegistrationResult",
    "RegistrationService",
    "SessionCredential",
    "SessionTokenIssuer",
    "SigningKeyMissing",
    "TokenError",
    "TokenKind",
    "VerifiedActivation",
]
