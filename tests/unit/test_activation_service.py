"""
Unit tests for ActivationService domain logic.

Tests verify:
- Token verification failures abort before touching the directory
- Code comparison is exact
- Replayed activations are rejected, not duplicated
- Directory conflicts propagate as DuplicateAccount
"""

from unittest.mock import Mock

import pytest

from src.domain.activation import ActivationService
from src.domain.exceptions import (
    AccountAlreadyActivated,
    CodeMismatch,
    DuplicateAccount,
    ExpiredToken,
    InvalidToken,
)
from src.domain.models import Account, PendingRegistration, VerifiedActivation

REGISTRATION = PendingRegistration(
    name="Ana",
    email="ana@x.com",
    hashed_password="$2b$10$hashed",
    phone_number=5551234,
)

ACCOUNT = Account(
    id="acc-1",
    name="Ana",
    email="ana@x.com",
    hashed_password="$2b$10$hashed",
    phone_number=5551234,
)


def make_service() -> ActivationService:
    directory = Mock()
    directory.find_by_email.return_value = None
    directory.create.return_value = ACCOUNT
    codec = Mock()
    codec.verify.return_value = VerifiedActivation(registration=REGISTRATION, activation_code="4821")
    return ActivationService(directory=directory, activation_codec=codec)


class TestTokenVerification:
    """Tests for activation token checks."""

    @pytest.mark.parametrize("error", [InvalidToken("bad"), ExpiredToken("old")])
    def test_token_failure_never_touches_directory(self, error: Exception) -> None:
        service = make_service()
        service.activation_codec.verify.side_effect = error

        with pytest.raises(type(error)):
            service.activate("token", "4821")

        service.directory.find_by_email.assert_not_called()
        service.directory.create.assert_not_called()

    def test_verifies_supplied_token(self) -> None:
        service = make_service()
        service.activate("the.token.value", "4821")

        service.activation_codec.verify.assert_called_once_with("the.token.value")


class TestCodeMatching:
    """Tests for activation code comparison."""

    @pytest.mark.parametrize("code", ["0000", "4820", "482", "48210", " 4821", ""])
    def test_wrong_code_rejected(self, code: str) -> None:
        service = make_service()

        with pytest.raises(CodeMismatch):
            service.activate("token", code)

        service.directory.create.assert_not_called()

    def test_correct_code_creates_account(self) -> None:
        service = make_service()

        account = service.activate("token", "4821")

        assert account == ACCOUNT
        service.directory.create.assert_called_once_with(REGISTRATION)


class TestReplay:
    """Tests for already-activated registrations."""

    def test_existing_email_rejected(self) -> None:
        service = make_service()
        service.directory.find_by_email.return_value = ACCOUNT

        with pytest.raises(AccountAlreadyActivated):
            service.activate("token", "4821")

        service.directory.create.assert_not_called()

    def test_email_rechecked_from_token_payload(self) -> None:
        service = make_service()
        service.activate("token", "4821")

        service.directory.find_by_email.assert_called_once_with("ana@x.com")

    def test_directory_conflict_propagates(self) -> None:
        """A concurrent activation that wins the race surfaces as DuplicateAccount."""
        service = make_service()
        service.directory.create.side_effect = DuplicateAccount("accounts_email_key")

        with pytest.raises(DuplicateAccount):
            service.activate("token", "4821")


class TestWithRealAdapters:
    """End-to-end activation with real codec and in-memory directory."""

    def test_example_scenario(self, registration_service, activation_service, notifier, directory) -> None:
        """register -> wrong code -> correct code -> replay."""
        result = registration_service.register("Ana", "ana@x.com", "password1", 5551234)
        code = notifier.send_activation_email.call_args[0][2]

        with pytest.raises(CodeMismatch):
            activation_service.activate(result.activation_token, "0000")

        account = activation_service.activate(result.activation_token, code)
        assert account.name == "Ana"
        assert account.email == "ana@x.com"
        assert account.phone_number == 5551234
        assert account.hashed_password != "password1"

        with pytest.raises(AccountAlreadyActivated):
            activation_service.activate(result.activation_token, code)

        assert len(directory.list_all()) == 1

    def test_wrong_code_leaves_token_usable(self, registration_service, activation_service, notifier) -> None:
        result = registration_service.register("Ana", "ana@x.com", "password1", 5551234)
        code = notifier.send_activation_email.call_args[0][2]
        wrong = "1000" if code != "1000" else "1001"

        with pytest.raises(CodeMismatch):
            activation_service.activate(result.activation_token, wrong)

        assert activation_service.activate(result.activation_token, code).email == "ana@x.com"
