"""
API v1 routes.

Defines REST endpoints for the account activation API. Routes only
translate between HTTP and the domain services; domain errors are mapped
to status codes here. Infrastructure errors are left to the app-level
handler in src.api.main.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import (
    get_activation_service,
    get_auth_service,
    get_bearer_token,
    get_registration_service,
)
from src.api.models import (
    AccountResponse,
    ActivateRequest,
    ActivateResponse,
    ErrorResponse,
    LoginError,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RefreshRequest,
    RegisterRequest,
    RegisterResponse,
    TokenPairResponse,
)
from src.domain.activation import ActivationService
from src.domain.authentication import AuthService
from src.domain.exceptions import (
    AccountAlreadyActivated,
    CodeMismatch,
    DuplicateAccount,
    InvalidPassword,
    RegistrationError,
    TokenError,
)
from src.domain.models import Account
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Email or phone number already registered"},
        422: {"description": "Validation error"},
    },
    summary="Register a new user",
    description="Submit name, email, password and phone number to begin registration. "
    "A 4-digit activation code will be sent to the provided email; the response "
    "carries the activation token that must be submitted with it.",
)
async def register(
    request_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a new user and send activation code.

    Returns the activation token and its lifetime. The code is never returned.
    """
    try:
        result = service.register(
            request_data.name,
            request_data.email,
            request_data.password,
            request_data.phone_number,
        )
    except InvalidPassword:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Password must be at most 72 bytes",
        ) from None
    except RegistrationError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Registration failed",
        ) from None
    return RegisterResponse(
        message="Activation code sent",
        activation_token=result.activation_token,
        expires_in_seconds=result.expires_in_seconds,
    )


@router.post(
    "/activate",
    response_model=ActivateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid activation code"},
        401: {"model": ErrorResponse, "description": "Invalid or expired activation token"},
        409: {"model": ErrorResponse, "description": "Account already activated"},
        422: {"description": "Validation error"},
    },
    summary="Activate account with activation code",
    description="Submit the activation token returned by /register together with "
    "the 4-digit code received via email to create the account.",
)
async def activate(
    request_data: ActivateRequest,
    service: ActivationService = Depends(get_activation_service),
) -> ActivateResponse:
    try:
        account = service.activate(request_data.activation_token, request_data.activation_code)
    except TokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired activation token",
        ) from None
    except CodeMismatch:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid activation code",
        ) from None
    except (AccountAlreadyActivated, DuplicateAccount):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Account already activated",
        ) from None
    return ActivateResponse(
        message="Account activated",
        account=AccountResponse.from_account(account),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"model": LoginResponse, "description": "Invalid email or password"},
        422: {"description": "Validation error"},
    },
    summary="Log in",
    description="Exchange email and password for an access/refresh token pair.",
)
async def login(
    request_data: LoginRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    """
    Log in with email and password.

    Unknown email and wrong password return the same 401 body so the
    response cannot be used to discover registered emails.
    """
    result = service.login(request_data.email, request_data.password)

    if not result.succeeded:
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return LoginResponse(error=LoginError(message=INVALID_CREDENTIALS_MESSAGE))

    return LoginResponse(
        account=AccountResponse.from_account(result.account),
        access_token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post(
    "/refresh",
    response_model=TokenPairResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid or expired refresh token"}},
    summary="Refresh session tokens",
)
async def refresh(
    request_data: RefreshRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenPairResponse:
    try:
        credential = service.refresh(request_data.refresh_token)
    except TokenError:
        raise _unauthorized("Invalid or expired refresh token") from None
    return TokenPairResponse(
        access_token=credential.access_token,
        refresh_token=credential.refresh_token,
    )


@router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Log out",
    description="Stateless acknowledgement. Issued tokens stay valid until they "
    "expire; clients must discard them.",
)
async def logout(service: AuthService = Depends(get_auth_service)) -> LogoutResponse:
    result = service.logout()
    return LogoutResponse(message=result.message)


def get_current_account(
    token: str = Depends(get_bearer_token),
    service: AuthService = Depends(get_auth_service),
) -> Account:
    """Resolve the account for the bearer access token."""
    try:
        return service.current_user(token)
    except TokenError:
        raise _unauthorized("Invalid or expired access token") from None


@router.get(
    "/me",
    response_model=AccountResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid or expired access token"}},
    summary="Get the logged-in account",
)
async def me(account: Account = Depends(get_current_account)) -> AccountResponse:
    return AccountResponse.from_account(account)


@router.get(
    "/users",
    response_model=list[AccountResponse],
    responses={401: {"model": ErrorResponse, "description": "Invalid or expired access token"}},
    summary="List accounts",
)
async def list_users(
    _: Account = Depends(get_current_account),
    service: AuthService = Depends(get_auth_service),
) -> list[AccountResponse]:
    return [AccountResponse.from_account(account) for account in service.list_accounts()]
