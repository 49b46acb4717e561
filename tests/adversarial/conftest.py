"""
Shared fixtures for adversarial tests.

Provides a registered-but-not-activated user and a helper for forging
tokens with arbitrary claims.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import jwt
import pytest

from src.domain.models import ActivationTicket

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture
def pending(registration_service, notifier: Mock) -> ActivationTicket:
    """Register Ana and capture the token and the emailed code."""
    result = registration_service.register("Ana", "ana@x.com", "password1", 5551234)
    code = notifier.send_activation_email.call_args[0][2]
    return ActivationTicket(token=result.activation_token, activation_code=code)


@pytest.fixture
def forge():
    """Sign arbitrary claims with a given secret, filling iat/exp."""

    def _forge(claims: dict, secret: str, ttl: timedelta = timedelta(minutes=5), **kwargs) -> str:
        now = datetime.now(timezone.utc)
        payload = {"iat": now, "exp": now + ttl, **claims}
        return jwt.encode(payload, secret, **{"algorithm": "HS256", **kwargs})

    return _forge
