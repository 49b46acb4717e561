"""
Unit tests for AuthService domain logic.

Tests verify:
- Login issues an access/refresh pair for valid credentials
- Unknown email and wrong password produce identical failures
- Unknown email still pays for a bcrypt comparison
- Refresh and current-user resolution
- Logout is a stateless acknowledgement
"""

from unittest.mock import Mock

import pytest

from src.domain.authentication import AuthService
from src.domain.exceptions import ExpiredToken, InvalidCredentials, InvalidToken
from src.domain.models import Account, AuthFailure, LoginResult, PendingRegistration
from src.domain.ports import TokenKind


@pytest.fixture
def account(directory, hasher) -> Account:
    return directory.create(
        PendingRegistration(
            name="Ana",
            email="ana@x.com",
            hashed_password=hasher.hash("password1"),
            phone_number=5551234,
        )
    )


class TestLogin:
    """Tests for login()."""

    def test_login_success_issues_token_pair(
        self, auth_service: AuthService, account: Account, session_issuer
    ) -> None:
        result = auth_service.login("ana@x.com", "password1")

        assert result.succeeded
        assert result.error is None
        assert result.account == account
        assert session_issuer.verify(result.access_token, TokenKind.ACCESS) == account.id
        assert session_issuer.verify(result.refresh_token, TokenKind.REFRESH) == account.id

    def test_login_normalizes_email(self, auth_service: AuthService, account: Account) -> None:
        assert auth_service.login("  ANA@X.COM ", "password1").succeeded

    def test_wrong_password_fails(self, auth_service: AuthService, account: Account) -> None:
        result = auth_service.login("ana@x.com", "password2")

        assert not result.succeeded
        assert result == LoginResult(None, None, None, AuthFailure.INVALID_CREDENTIALS)

    def test_unknown_email_fails(self, auth_service: AuthService, account: Account) -> None:
        result = auth_service.login("nobody@x.com", "password1")

        assert result == LoginResult.failure()

    def test_failure_shapes_identical(self, auth_service: AuthService, account: Account) -> None:
        """No field distinguishes unknown email from wrong password."""
        assert auth_service.login("nobody@x.com", "password1") == auth_service.login(
            "ana@x.com", "wrong-password"
        )

    def test_unknown_email_runs_dummy_verify(self) -> None:
        directory = Mock()
        directory.find_by_email.return_value = None
        hasher = Mock()
        service = AuthService(directory=directory, password_hasher=hasher, session_issuer=Mock())

        service.login("nobody@x.com", "password1")

        hasher.dummy_verify.assert_called_once_with("password1")
        service.session_issuer.issue_access_token.assert_not_called()

    def test_wrong_password_issues_no_tokens(self) -> None:
        directory = Mock()
        directory.find_by_email.return_value = Account(
            id="acc-1", name="Ana", email="ana@x.com", hashed_password="h", phone_number=1
        )
        hasher = Mock()
        hasher.verify.return_value = False
        issuer = Mock()
        service = AuthService(directory=directory, password_hasher=hasher, session_issuer=issuer)

        service.login("ana@x.com", "password1")

        issuer.issue_access_token.assert_not_called()
        issuer.issue_refresh_token.assert_not_called()


class TestAuthenticate:
    """Tests for authenticate()."""

    def test_returns_account(self, auth_service: AuthService, account: Account) -> None:
        assert auth_service.authenticate("ana@x.com", "password1") == account

    @pytest.mark.parametrize(
        "email,password", [("ana@x.com", "nope"), ("ghost@x.com", "password1")]
    )
    def test_raises_invalid_credentials(
        self, auth_service: AuthService, account: Account, email: str, password: str
    ) -> None:
        with pytest.raises(InvalidCredentials):
            auth_service.authenticate(email, password)


class TestRefresh:
    """Tests for refresh()."""

    def test_refresh_issues_new_pair(
        self, auth_service: AuthService, account: Account, session_issuer
    ) -> None:
        login = auth_service.login("ana@x.com", "password1")

        credential = auth_service.refresh(login.refresh_token)

        assert credential.refresh_token != login.refresh_token
        assert session_issuer.verify(credential.access_token, TokenKind.ACCESS) == account.id

    def test_access_token_cannot_refresh(self, auth_service: AuthService, account: Account) -> None:
        login = auth_service.login("ana@x.com", "password1")

        with pytest.raises(InvalidToken):
            auth_service.refresh(login.access_token)

    def test_refresh_for_missing_account(self, auth_service: AuthService, session_issuer) -> None:
        ghost = Account(id="gone", name="G", email="g@x.com", hashed_password="h", phone_number=9)
        token = session_issuer.issue_refresh_token(ghost)

        with pytest.raises(InvalidToken):
            auth_service.refresh(token)

    def test_expired_refresh_propagates(self) -> None:
        issuer = Mock()
        issuer.verify.side_effect = ExpiredToken("old")
        service = AuthService(directory=Mock(), password_hasher=Mock(), session_issuer=issuer)

        with pytest.raises(ExpiredToken):
            service.refresh("token")

        issuer.verify.assert_called_once_with("token", TokenKind.REFRESH)


class TestCurrentUser:
    """Tests for current_user() and list_accounts()."""

    def test_current_user_from_access_token(self, auth_service: AuthService, account: Account) -> None:
        login = auth_service.login("ana@x.com", "password1")
        assert auth_service.current_user(login.access_token) == account

    def test_refresh_token_not_accepted(self, auth_service: AuthService, account: Account) -> None:
        login = auth_service.login("ana@x.com", "password1")
        with pytest.raises(InvalidToken):
            auth_service.current_user(login.refresh_token)

    def test_list_accounts(self, auth_service: AuthService, account: Account) -> None:
        assert auth_service.list_accounts() == [account]


class TestLogout:
    """Tests for logout()."""

    def test_logout_acknowledges(self, auth_service: AuthService) -> None:
        assert auth_service.logout().message == "Logged out"

    def test_logout_does_not_invalidate_tokens(
        self, auth_service: AuthService, account: Account
    ) -> None:
        """No revocation store: tokens stay valid until expiry."""
        login = auth_service.login("ana@x.com", "password1")

        auth_service.logout()

        assert auth_service.current_user(login.access_token) == account
