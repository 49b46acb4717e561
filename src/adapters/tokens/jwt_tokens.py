"""
JWT token adapters - Implement ActivationTokenCodec and SessionTokenIssuer.

Three independent signing domains are used, each with its own secret and
audience claim:

- account-activation: pending registration + activation code, 5 minutes
- session-access:     account id, short-lived
- session-refresh:    account id, long-lived

A token from one domain never verifies in another. Even when two secrets
are configured identically, the audience check still fails closed.

The injectable clock only stamps iat and exp when a token is issued.
Verification is done by jwt.decode, which checks exp against the wall
clock; tests simulate elapsed time by issuing from a clock in the past.
"""

import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from src.domain.exceptions import ExpiredToken, InvalidToken, SigningKeyMissing
from src.domain.models import (
    Account,
    ActivationTicket,
    PendingRegistration,
    VerifiedActivation,
)
from src.domain.ports import TokenKind

logger = logging.getLogger(__name__)

ACTIVATION_AUDIENCE = "account-activation"
ACCESS_AUDIENCE = "session-access"
REFRESH_AUDIENCE = "session-refresh"

DEFAULT_ALGORITHM = "HS256"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_secret(secret: str | None, name: str) -> str:
    if not secret:
        raise SigningKeyMissing(f"{name} is not configured")
    return secret


def _decode(token: str, secret: str, algorithm: str, audience: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            audience=audience,
            options={"require": ["exp", "iat", "aud"]},
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredToken(f"{audience} token has expired") from None
    except jwt.InvalidTokenError as e:
        raise InvalidToken(f"Invalid {audience} token: {e!s}") from None


def generate_activation_code() -> str:
    """
    Generate a 4-digit activation code.

    Uniform over [1000, 9999] using the secrets module, so the code never
    has a leading zero.
    """
    return str(1000 + secrets.randbelow(9000))


class JwtActivationTokenCodec:
    """
    Implements ActivationTokenCodec protocol via PyJWT.

    The token is the only record of a pending registration: it embeds the
    hashed password, so it is signed but must still be treated as sensitive.
    """

    def __init__(
        self,
        secret: str | None,
        ttl_seconds: int = 300,
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = _require_secret(secret, "Activation secret")
        self._ttl = timedelta(seconds=ttl_seconds)
        self._algorithm = algorithm
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, registration: PendingRegistration) -> ActivationTicket:
        activation_code = generate_activation_code()
        now = self._clock()
        payload = {
            "aud": ACTIVATION_AUDIENCE,
            "iat": now,
            "exp": now + self._ttl,
            "registration": {
                "name": registration.name,
                "email": registration.email,
                "hashed_password": registration.hashed_password,
                "phone_number": registration.phone_number,
            },
            "activation_code": activation_code,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return ActivationTicket(token=token, activation_code=activation_code)

    def verify(self, token: str) -> VerifiedActivation:
        payload = _decode(token, self._secret, self._algorithm, ACTIVATION_AUDIENCE)

        data = payload.get("registration")
        activation_code = payload.get("activation_code")
        if not isinstance(data, dict) or not isinstance(activation_code, str):
            raise InvalidToken("Activation token payload is malformed")

        name = data.get("name")
        email = data.get("email")
        hashed_password = data.get("hashed_password")
        phone_number = data.get("phone_number")
        if not (
            isinstance(name, str)
            and isinstance(email, str)
            and isinstance(hashed_password, str)
            and isinstance(phone_number, int)
            and not isinstance(phone_number, bool)
        ):
            raise InvalidToken("Activation token registration is malformed")

        registration = PendingRegistration(
            name=name,
            email=email,
            hashed_password=hashed_password,
            phone_number=phone_number,
        )
        return VerifiedActivation(registration=registration, activation_code=activation_code)


class JwtSessionTokenIssuer:
    """
    Implements SessionTokenIssuer protocol via PyJWT.

    No revocation store: a session token is valid until its exp claim.
    """

    def __init__(
        self,
        access_secret: str | None,
        refresh_secret: str | None,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=3),
        algorithm: str = DEFAULT_ALGORITHM,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._domains = {
            TokenKind.ACCESS: (
                _require_secret(access_secret, "Access token secret"),
                access_ttl,
                ACCESS_AUDIENCE,
            ),
            TokenKind.REFRESH: (
                _require_secret(refresh_secret, "Refresh token secret"),
                refresh_ttl,
                REFRESH_AUDIENCE,
            ),
        }
        self._algorithm = algorithm
        self._clock = clock

    def issue_access_token(self, account: Account) -> str:
        return self._issue(account, TokenKind.ACCESS)

    def issue_refresh_token(self, account: Account) -> str:
        return self._issue(account, TokenKind.REFRESH)

    def verify(self, token: str, kind: TokenKind) -> str:
        secret, _, audience = self._domains[kind]
        payload = _decode(token, secret, self._algorithm, audience)

        account_id = payload.get("sub")
        if not isinstance(account_id, str) or not account_id:
            raise InvalidToken(f"{kind.value} token has no subject")
        return account_id

    def _issue(self, account: Account, kind: TokenKind) -> str:
        secret, ttl, audience = self._domains[kind]
        now = self._clock()
        payload = {
            "sub": account.id,
            "email": account.email,
            "aud": audience,
            "iat": now,
            "exp": now + ttl,
            "jti": secrets.token_urlsafe(16),
        }
        token = jwt.encode(payload, secret, algorithm=self._algorithm)
        logger.debug("Issued %s token for account %s", kind.value, account.id)
        return token
