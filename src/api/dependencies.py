"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountDirectory
from src.adapters.security.bcrypt_hasher import BcryptPasswordHasher
from src.adapters.smtp.console import ConsoleNotifier
from src.adapters.tokens.jwt_tokens import JwtActivationTokenCodec, JwtSessionTokenIssuer
from src.config.settings import get_settings
from src.domain.activation import ActivationService
from src.domain.authentication import AuthService
from src.domain.ports import AccountDirectory, Notifier
from src.domain.registration import RegistrationService

# Module-level singleton - ConsoleNotifier is stateless
_notifier = ConsoleNotifier()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_account_directory(request: Request) -> AccountDirectory:
    """Create directory with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAccountDirectory(pool)


def get_notifier() -> Notifier:
    """Get console notifier (singleton)."""
    return _notifier


@lru_cache
def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(cost=get_settings().bcrypt_cost)


@lru_cache
def get_activation_codec() -> JwtActivationTokenCodec:
    settings = get_settings()
    return JwtActivationTokenCodec(
        secret=settings.activation_secret,
        ttl_seconds=settings.activation_ttl_seconds,
        algorithm=settings.jwt_algorithm,
    )


@lru_cache
def get_session_issuer() -> JwtSessionTokenIssuer:
    settings = get_settings()
    return JwtSessionTokenIssuer(
        access_secret=settings.access_token_secret,
        refresh_secret=settings.refresh_token_secret,
        access_ttl=timedelta(minutes=settings.access_token_ttl_minutes),
        refresh_ttl=timedelta(days=settings.refresh_token_ttl_days),
        algorithm=settings.jwt_algorithm,
    )


def get_registration_service(
    directory: AccountDirectory = Depends(get_account_directory),
    notifier: Notifier = Depends(get_notifier),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the directory, hasher, activation codec and notifier.
    """
    codec = get_activation_codec()
    return RegistrationService(
        directory=directory,
        password_hasher=get_password_hasher(),
        activation_codec=codec,
        notifier=notifier,
        activation_ttl_seconds=codec.ttl_seconds,
    )


def get_activation_service(
    directory: AccountDirectory = Depends(get_account_directory),
) -> ActivationService:
    return ActivationService(directory=directory, activation_codec=get_activation_codec())


def get_auth_service(
    directory: AccountDirectory = Depends(get_account_directory),
) -> AuthService:
    return AuthService(
        directory=directory,
        password_hasher=get_password_hasher(),
        session_issuer=get_session_issuer(),
    )


# Bearer scheme for OpenAPI documentation
http_bearer = HTTPBearer()


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials = Depends(http_bearer),
) -> str:
    """
    Extract the raw token from the Authorization: Bearer header.

    HTTPBearer rejects a missing or non-bearer Authorization header
    before this runs.
    """
    return credentials.credentials
