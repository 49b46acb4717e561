"""
bcrypt password hasher adapter - Implements PasswordHasher protocol.

Security Design:
---------------
1. **bcrypt.gensalt(rounds)**: Fresh salt per hash, cost factor >= 10.
   Passwords over 72 bytes are rejected as input errors before hashing.

2. **bcrypt.checkpw()**: Constant-time comparison. A malformed stored hash
   makes checkpw raise ValueError; verify() reports that as a mismatch.

3. **_DUMMY_BCRYPT_HASH**: dummy_verify() compares against a pre-computed
   hash so logins for unknown emails pay the same bcrypt cost as real ones.
"""

import logging

import bcrypt

from src.domain.exceptions import HashingFailure, InvalidPassword

logger = logging.getLogger(__name__)

MIN_BCRYPT_COST = 10
MAX_PASSWORD_BYTES = 72

# Hash of "dummy_password_for_timing_safety" with cost factor 10.
_DUMMY_BCRYPT_HASH = bcrypt.hashpw(
    b"dummy_password_for_timing_safety", bcrypt.gensalt(MIN_BCRYPT_COST)
)


class BcryptPasswordHasher:
    """
    Implements PasswordHasher protocol via bcrypt.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Stateless apart from the cost factor, safe to share across requests.
    """

    def __init__(self, cost: int = MIN_BCRYPT_COST) -> None:
        """
        Initialize hasher with a work factor.

        Args:
            cost: bcrypt cost factor (log2 rounds), at least 10

        Raises:
            ValueError: If cost is below the minimum
        """
        if cost < MIN_BCRYPT_COST:
            raise ValueError(f"bcrypt cost must be >= {MIN_BCRYPT_COST}, got {cost}")
        self._cost = cost

    @property
    def cost(self) -> int:
        return self._cost

    def hash(self, plaintext: str) -> str:
        """
        Hash a password with a fresh salt.

        Raises:
            InvalidPassword: If the password exceeds 72 bytes as UTF-8
            HashingFailure: If the bcrypt primitive fails
        """
        password = plaintext.encode()
        if len(password) > MAX_PASSWORD_BYTES:
            raise InvalidPassword(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        try:
            hashed = bcrypt.hashpw(password, bcrypt.gensalt(rounds=self._cost))
        except (ValueError, MemoryError) as e:
            logger.error("Password hashing failed: %s", type(e).__name__)
            raise HashingFailure("Password hashing failed") from e
        return hashed.decode()

    def verify(self, plaintext: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode(), hashed_password.encode())
        except ValueError:
            return False

    def dummy_verify(self, plaintext: str) -> None:
        self.verify(plaintext, _DUMMY_BCRYPT_HASH.decode())
