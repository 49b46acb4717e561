"""
Activation domain service - Turns a verified pending registration into an account.

Activation is the only path that creates durable accounts. Checks run in
a fixed order and any failure aborts before the directory is written:

    1. token signature and expiry      -> InvalidToken / ExpiredToken
    2. activation code                 -> CodeMismatch
    3. email not yet activated         -> AccountAlreadyActivated
    4. create account                  -> DuplicateAccount on store conflict

Replaying a consumed token fails at step 3, so the same token never
yields a second account.
"""

import logging
import secrets
from dataclasses import dataclass

from .exceptions import AccountAlreadyActivated, CodeMismatch
from .models import Account
from .ports import AccountDirectory, ActivationTokenCodec

logger = logging.getLogger(__name__)


@dataclass
class ActivationService:
    """Domain service for account activation."""

    directory: AccountDirectory
    activation_codec: ActivationTokenCodec

    def activate(self, activation_token: str, activation_code: str) -> Account:
        """
        Verify the activation token and code, then create the account.

        Args:
            activation_token: Token returned by RegistrationService.register
            activation_code: 4-digit code delivered by email

        Returns:
            The newly created Account

        Raises:
            InvalidToken: Token signature or payload is invalid
            ExpiredToken: Token is older than its lifetime
            CodeMismatch: Code differs from the one embedded in the token
            AccountAlreadyActivated: Token was already used
            DuplicateAccount: Directory rejected the account (concurrent activation)
        """
        verified = self.activation_codec.verify(activation_token)

        if not secrets.compare_digest(
            verified.activation_code.encode(), activation_code.encode()
        ):
            raise CodeMismatch()

        registration = verified.registration
        if self.directory.find_by_email(registration.email) is not None:
            raise AccountAlreadyActivated(registration.email)

        account = self.directory.create(registration)
        logger.info("Account activated: id=%s email=%s", account.id, account.email)
        return account
