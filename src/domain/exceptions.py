"""
Domain exceptions - Semantic error types for the account lifecycle.

Two separate roots let callers tell "your input was rejected" apart from
"the system is broken":

- AccountError: validation failures caused by caller input or account state.
- InfrastructureError: a collaborator (hashing, signing keys, storage) failed.
"""


class AccountError(Exception):
    """Base class for account domain errors."""

    pass


class RegistrationError(AccountError):
    """Base class for registration errors."""

    pass


class DuplicateEmail(RegistrationError):
    """An account already exists with this email."""

    pass


class DuplicatePhone(RegistrationError):
    """An account already exists with this phone number."""

    pass


class DuplicateAccount(RegistrationError):
    """The directory's unique constraint rejected a new account."""

    pass


class InvalidPassword(RegistrationError):
    """Password is longer than bcrypt accepts (72 bytes once UTF-8 encoded)."""

    pass



class TokenError(AccountError):
    """Base class for signed token failures."""

    pass


class InvalidToken(TokenError):
    """Signature, audience or payload shape check failed."""

    pass


class ExpiredToken(TokenError):
    """Token signature is valid but its expiry has passed."""

    pass


class ActivationError(AccountError):
    """Base class for activation errors."""

    pass


class CodeMismatch(ActivationError):
    """Supplied activation code does not match the one embedded in the token."""

    pass


class AccountAlreadyActivated(ActivationError):
    """The token's registration was already turned into an account."""

    pass


class AuthenticationError(AccountError):
    """Base class for authentication errors."""

    pass


class InvalidCredentials(AuthenticationError):
    """Unknown email or wrong password. Deliberately does not say which."""

    pass


class InfrastructureError(Exception):
    """Base class for fatal collaborator failures."""

    pass


class HashingFailure(InfrastructureError):
    """The password hashing primitive failed."""

    pass


class SigningKeyMissing(InfrastructureError):
    """A token signing secret is not configured."""

    pass


class DirectoryUnavailable(InfrastructureError):
    """The account store could not be reached."""

    pass
