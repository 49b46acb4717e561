"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Real adapters (bcrypt hasher, JWT codecs, in-memory directory)
- Domain services wired against them
- Mock notifier for capturing activation codes
"""

from unittest.mock import Mock

import pytest

from src.adapters.repository.memory import InMemoryAccountDirectory
from src.adapters.security.bcrypt_hasher import BcryptPasswordHasher
from src.adapters.tokens.jwt_tokens import JwtActivationTokenCodec, JwtSessionTokenIssuer
from src.domain.activation import ActivationService
from src.domain.authentication import AuthService
from src.domain.registration import RegistrationService


@pytest.fixture(scope="session")
def activation_secret() -> str:
    return "test-activation-secret-0123456789abcdef0123"


@pytest.fixture(scope="session")
def access_secret() -> str:
    return "test-access-secret-0123456789abcdef01234567"


@pytest.fixture(scope="session")
def refresh_secret() -> str:
    return "test-refresh-secret-0123456789abcdef0123456"


@pytest.fixture(scope="session")
def hasher() -> BcryptPasswordHasher:
    """bcrypt hasher at the minimum allowed cost."""
    return BcryptPasswordHasher(cost=10)


@pytest.fixture
def activation_codec(activation_secret: str) -> JwtActivationTokenCodec:
    return JwtActivationTokenCodec(secret=activation_secret, ttl_seconds=300)


@pytest.fixture
def session_issuer(access_secret: str, refresh_secret: str) -> JwtSessionTokenIssuer:
    return JwtSessionTokenIssuer(access_secret=access_secret, refresh_secret=refresh_secret)


@pytest.fixture
def directory() -> InMemoryAccountDirectory:
    return InMemoryAccountDirectory()


@pytest.fixture
def notifier() -> Mock:
    """Notifier mock; the activation code is call_args[0][2]."""
    return Mock()


@pytest.fixture
def registration_service(
    directory: InMemoryAccountDirectory,
    hasher: BcryptPasswordHasher,
    activation_codec: JwtActivationTokenCodec,
    notifier: Mock,
) -> RegistrationService:
    return RegistrationService(
        directory=directory,
        password_hasher=hasher,
        activation_codec=activation_codec,
        notifier=notifier,
    )


@pytest.fixture
def activation_service(
    directory: InMemoryAccountDirectory, activation_codec: JwtActivationTokenCodec
) -> ActivationService:
    return ActivationService(directory=directory, activation_codec=activation_codec)


@pytest.fixture
def auth_service(
    directory: InMemoryAccountDirectory,
    hasher: BcryptPasswordHasher,
    session_issuer: JwtSessionTokenIssuer,
) -> AuthService:
    return AuthService(directory=directory, password_hasher=hasher, session_issuer=session_issuer)
