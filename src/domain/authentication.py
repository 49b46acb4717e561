"""
Authentication domain service - Login, refresh and logout.

Sessions are stateless signed tokens. There is no server-side session
table and no revocation list: a token stays valid until it expires, and
logout only acknowledges that the client discards its tokens.
"""

from dataclasses import dataclass

from .exceptions import InvalidCredentials, InvalidToken
from .models import Account, LoginResult, LogoutResult, SessionCredential
from .ports import AccountDirectory, PasswordHasher, SessionTokenIssuer, TokenKind
from .registration import normalize_email


@dataclass
class AuthService:
    """Domain service for credential checks and session issuance."""

    directory: AccountDirectory
    password_hasher: PasswordHasher
    session_issuer: SessionTokenIssuer

    def authenticate(self, email: str, password: str) -> Account:
        """
        Resolve an account from email and password.

        For an unknown email a dummy bcrypt comparison still runs, so
        response time does not reveal whether the account exists.

        Raises:
            InvalidCredentials: Unknown email or wrong password
        """
        account = self.directory.find_by_email(normalize_email(email))
        if account is None:
            self.password_hasher.dummy_verify(password)
            raise InvalidCredentials()

        if not self.password_hasher.verify(password, account.hashed_password):
            raise InvalidCredentials()

        return account

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and issue an access/refresh token pair.

        Returns:
            LoginResult with account and tokens, or LoginResult.failure()
        """
        try:
            account = self.authenticate(email, password)
        except InvalidCredentials:
            return LoginResult.failure()

        credential = self._issue_session(account)
        return LoginResult(
            account=account,
            access_token=credential.access_token,
            refresh_token=credential.refresh_token,
        )

    def refresh(self, refresh_token: str) -> SessionCredential:
        """
        Exchange a valid refresh token for a new token pair.

        Raises:
            InvalidToken: Token invalid or its account no longer exists
            ExpiredToken: Refresh token expired
        """
        account = self._resolve(refresh_token, TokenKind.REFRESH)
        return self._issue_session(account)

    def current_user(self, access_token: str) -> Account:
        """
        Resolve the account an access token was issued for.

        Raises:
            InvalidToken: Token invalid or its account no longer exists
            ExpiredToken: Access token expired
        """
        return self._resolve(access_token, TokenKind.ACCESS)

    def list_accounts(self) -> list[Account]:
        return self.directory.list_all()

    def logout(self) -> LogoutResult:
        """Acknowledge logout. Nothing server-side is invalidated."""
        return LogoutResult()

    def _resolve(self, token: str, kind: TokenKind) -> Account:
        account_id = self.session_issuer.verify(token, kind)
        account = self.directory.find_by_id(account_id)
        if account is None:
            raise InvalidToken(f"No account for {kind.value} token subject")
        return account

    def _issue_session(self, account: Account) -> SessionCredential:
        return SessionCredential(
            access_token=self.session_issuer.issue_access_token(account),
            refresh_token=self.session_issuer.issue_refresh_token(account),
        )
