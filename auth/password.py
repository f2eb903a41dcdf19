"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.  The hashing itself is CPU-bound,
so the async entry points push it onto a worker thread.
"""

from __future__ import annotations

import asyncio

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only reads this many bytes; longer secrets are cut, as node bcrypt does
MAX_PASSWORD_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode()[:MAX_PASSWORD_BYTES]


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash_sync(self, password: str) -> str:
        if not isinstance(password, str):
            raise TypeError("password must be a string")
        return bcrypt.hashpw(_secret(password), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify_sync(self, password: str, password_hash: str) -> bool:
        """Constant-time comparison against a bcrypt hash."""
        try:
            return bcrypt.checkpw(_secret(password), password_hash.encode())
        except (ValueError, TypeError):
            return False

    async def hash(self, password: str) -> str:
        """Hash ``password``; raises ``ValueError``/``TypeError`` on bad input."""
        return await asyncio.to_thread(self.hash_sync, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify_sync, password, password_hash)
