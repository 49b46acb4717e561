"""
In-memory directory adapter - Implements AccountDirectory protocol.

Development and test stand-in for PostgresAccountDirectory. create()
checks uniqueness and inserts under one lock, giving the same guarantee
as the database UNIQUE constraints: concurrent creates for the same
email or phone number produce exactly one account.
"""

import threading
import uuid
from datetime import datetime, timezone

from src.domain.exceptions import DuplicateAccount
from src.domain.models import Account, PendingRegistration


class InMemoryAccountDirectory:
    """
    Implements AccountDirectory protocol with a dict keyed by account id.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Account | None:
        with self._lock:
            return next((a for a in self._accounts.values() if a.email == email), None)

    def find_by_phone(self, phone_number: int) -> Account | None:
        with self._lock:
            return next(
                (a for a in self._accounts.values() if a.phone_number == phone_number), None
            )

    def find_by_id(self, account_id: str) -> Account | None:
        with self._lock:
            return self._accounts.get(account_id)

    def create(self, registration: PendingRegistration) -> Account:
        with self._lock:
            for existing in self._accounts.values():
                if existing.email == registration.email:
                    raise DuplicateAccount("accounts_email_key")
                if existing.phone_number == registration.phone_number:
                    raise DuplicateAccount("accounts_phone_number_key")

            account = Account(
                id=str(uuid.uuid4()),
                name=registration.name,
                email=registration.email,
                hashed_password=registration.hashed_password,
                phone_number=registration.phone_number,
                created_at=datetime.now(timezone.utc),
            )
            self._accounts[account.id] = account
            return account

    def list_all(self) -> list[Account]:
        with self._lock:
            return list(self._accounts.values())
