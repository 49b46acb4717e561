"""
Registration domain service - Pending registrations as signed tokens.

Registration performs no storage write. The validated, hashed registration
is embedded in a short-lived signed activation token handed back to the
caller, while the activation code travels only through the notifier. An
account exists only once ActivationService receives both halves.

Step order is fixed: password length, then uniqueness checks, then hashing
and token issuance, then notification. Abandoned registrations need no
cleanup; their tokens simply expire.
"""

import logging
from dataclasses import dataclass

from .exceptions import DuplicateEmail, DuplicatePhone, InvalidPassword
from .models import PendingRegistration, RegistrationResult
from .ports import AccountDirectory, ActivationTokenCodec, Notifier, PasswordHasher

logger = logging.getLogger(__name__)

# bcrypt rejects longer input
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: email normalization, uniqueness
    checks, password hashing, activation token issuance and notification.
    """

    directory: AccountDirectory
    password_hasher: PasswordHasher
    activation_codec: ActivationTokenCodec
    notifier: Notifier
    activation_ttl_seconds: int = 300

    def register(self, name: str, email: str, password: str, phone_number: int) -> RegistrationResult:
        """
        Begin registration and send the activation code.

        Args:
            name: Display name
            email: User's email address (will be normalized)
            password: User's password (will be hashed)
            phone_number: User's phone number

        Returns:
            RegistrationResult with the activation token

        Raises:
            InvalidPassword: If the password exceeds 72 bytes as UTF-8
            DuplicateEmail: If an account already uses this email
            DuplicatePhone: If an account already uses this phone number
            HashingFailure: If password hashing fails
        """
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise InvalidPassword(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")

        normalized_email = normalize_email(email)

        if self.directory.find_by_email(normalized_email) is not None:
            raise DuplicateEmail(normalized_email)

        if self.directory.find_by_phone(phone_number) is not None:
            raise DuplicatePhone(phone_number)

        registration = PendingRegistration(
            name=name.strip(),
            email=normalized_email,
            hashed_password=self.password_hasher.hash(password),
            phone_number=phone_number,
        )
        ticket = self.activation_codec.issue(registration)

        # The token is already issued; delivery problems belong to the notifier.
        try:
            self.notifier.send_activation_email(
                registration.email, registration.name, ticket.activation_code
            )
        except Exception:
            logger.exception("Activation email dispatch failed for %s", registration.email)

        return RegistrationResult(
            activation_token=ticket.token,
            expires_in_seconds=self.activation_ttl_seconds,
        )
