"""
Registration and login orchestration.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from auth.jwt import TokenSigner
from auth.password import PasswordHasher
from core.errors import InternalError, InvalidCredentialsError, ValidationConflictError
from database.store import DocumentCollection, DuplicateKeyError, StoreError

logger = logging.getLogger(__name__)


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """The only user fields that ever leave the service."""
    return {"_id": user["id"], "username": user["username"]}


class AuthService:
    def __init__(
        self,
        *,
        users: DocumentCollection,
        hasher: PasswordHasher,
        signer: TokenSigner,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.signer = signer
        # Checked when the username is unknown so both login failures cost one bcrypt verify
        self._dummy_hash = hasher.hash_sync("dummy-password")

    async def register(self, username: str, password: str) -> Dict[str, Any]:
        try:
            existing = await self.users.find_one(username=username)
        except StoreError:
            logger.exception("Registration lookup failed for %r", username)
            raise InternalError()
        if existing is not None:
            raise ValidationConflictError()

        try:
            password_hash = await self.hasher.hash(password)
        except (ValueError, TypeError):
            logger.exception("Password hashing failed during registration")
            raise InternalError()

        try:
            user = await self.users.create(
                {"username": username, "password_hash": password_hash}
            )
        except DuplicateKeyError:
            # Lost a concurrent registration race for the same username
            raise ValidationConflictError()
        except StoreError:
            logger.exception("Registration insert failed for %r", username)
            raise InternalError()

        logger.info("Registered user %s (%s)", username, user["id"])
        return {"message": "User registered successfully", "user": public_user(user)}

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        user = await self.users.find_one(username=username)

        if user is None:
            await self.hasher.verify(password, self._dummy_hash)
            raise InvalidCredentialsError()
        if not await self.hasher.verify(password, user["password_hash"]):
            raise InvalidCredentialsError()

        token = self.signer.issue(user["id"])
        logger.info("Login: %s (%s)", user["username"], user["id"])
        return {"token": token, "userID": user["id"]}
