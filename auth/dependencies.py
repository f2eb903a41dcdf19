"""
Access guard for protected routes.

``require_user`` reads the ``Authorization`` header exactly as sent (the
token itself, no ``Bearer`` scheme), verifies it, and hands the handler a
``RequestContext`` carrying the authenticated user id.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header

from api.dependencies import get_token_signer
from auth.jwt import TokenSigner
from core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestContext:
    user_id: str


async def require_user(
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    signer: TokenSigner = Depends(get_token_signer),
) -> RequestContext:
    if not authorization:
        raise UnauthenticatedError()

    user_id = signer.verify(authorization)
    if user_id is None:
        logger.info("Rejected request with an invalid token")
        raise UnauthenticatedError("Invalid token")
    return RequestContext(user_id=user_id)
