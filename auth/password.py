"""
Password hashing and verification.

Uses argon2id (memory-hard) with a fresh random salt per hash.  The
salt and cost parameters are embedded in the PHC-format hash string.
"""

from __future__ import annotations

from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError

from core.errors import CorruptPasswordHash


class PasswordHasher:
    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ):
        self._argon2 = Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )
        # Verified against when a username is unknown, so that path costs
        # the same as a wrong password.
        self._dummy_hash = self._argon2.hash("dummy-password")

    def hash(self, password: str) -> str:
        """Hash a password with a freshly generated salt."""
        return self._argon2.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check ``password`` against a stored hash.

        Returns ``False`` on mismatch.  Raises ``CorruptPasswordHash`` if
        the stored hash cannot be parsed.
        """
        try:
            return self._argon2.verify(password_hash, password)
        except InvalidHashError as exc:
            raise CorruptPasswordHash("stored password hash is malformed") from exc
        except VerificationError:
            return False

    def verify_dummy(self, password: str) -> bool:
        """Burn one verification against a throwaway hash.  Always ``False``."""
        self.verify(password, self._dummy_hash)
        return False
