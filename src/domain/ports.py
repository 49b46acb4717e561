"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from enum import Enum
from typing import Protocol

from .models import (
    Account,
    ActivationTicket,
    PendingRegistration,
    VerifiedActivation,
)


class TokenKind(str, Enum):
    """
    Session token kinds.

    Each kind has its own secret, lifetime and audience, so a token of
    one kind never verifies as the other.
    """

    ACCESS = "access"
    REFRESH = "refresh"


class PasswordHasher(Protocol):
    """Port interface for one-way password hashing."""

    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext password with a fresh salt.

        Raises:
            HashingFailure: If the hashing primitive fails
        """
        ...

    def verify(self, plaintext: str, hashed_password: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Must be constant-time and must return False (never raise)
        for a malformed hash.
        """
        ...

    def dummy_verify(self, plaintext: str) -> None:
        """Spend the same time as verify() when there is no hash to check."""
        ...


class ActivationTokenCodec(Protocol):
    """Port interface for signed, time-limited activation tokens."""

    def issue(self, registration: PendingRegistration) -> ActivationTicket:
        """
        Generate an activation code and sign it together with the registration.

        Returns:
            ActivationTicket with the token and the plaintext 4-digit code
        """
        ...

    def verify(self, token: str) -> VerifiedActivation:
        """
        Verify signature and expiry and return the embedded data.

        Raises:
            InvalidToken: Signature, audience or payload check failed
            ExpiredToken: Token is past its expiry
        """
        ...


class SessionTokenIssuer(Protocol):
    """Port interface for access/refresh token issuance."""

    def issue_access_token(self, account: Account) -> str: ...

    def issue_refresh_token(self, account: Account) -> str: ...

    def verify(self, token: str, kind: TokenKind) -> str:
        """
        Verify a session token of the given kind.

        Returns:
            The account id the token was issued for

        Raises:
            InvalidToken: Signature, audience or payload check failed
            ExpiredToken: Token is past its expiry
        """
        ...


class AccountDirectory(Protocol):
    """
    Port interface for durable account storage.

    The backing store must enforce unique email and unique phone number.
    create() reports a constraint conflict as DuplicateAccount.
    """

    def find_by_email(self, email: str) -> Account | None: ...

    def find_by_phone(self, phone_number: int) -> Account | None: ...

    def find_by_id(self, account_id: str) -> Account | None: ...

    def create(self, registration: PendingRegistration) -> Account:
        """
        Persist a new account from an activated registration.

        Raises:
            DuplicateAccount: If email or phone number is already taken
        """
        ...

    def list_all(self) -> list[Account]: ...


class Notifier(Protocol):
    """Port interface for outbound activation emails."""

    def send_activation_email(self, email: str, name: str, activation_code: str) -> None:
        """
        Request delivery of the activation code to the user.

        Args:
            email: Recipient email address
            name: Recipient display name
            activation_code: 4-digit activation code
        """
        ...
