"""
JWT-style token creation and verification.

Tokens are URL-safe base64 JSON payloads signed with HMAC-SHA256::

    <base64url(payload)>.<hex hmac over the encoded payload>

The payload carries ``sub`` (the user id) and ``iat``.  Tokens carry no
expiry and stay valid for as long as the signing secret is unchanged.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import logging
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional

logger = logging.getLogger(__name__)


class TokenSigner:
    def __init__(self, secret: str) -> None:
        if not secret:
            raise ValueError("TokenSigner requires a non-empty secret")
        self._secret = secret.encode()

    def _sign(self, encoded_payload: str) -> str:
        return hmac.new(
            self._secret, encoded_payload.encode("utf-8", "replace"), hashlib.sha256
        ).hexdigest()

    def issue(self, subject_id: str) -> str:
        """Create a signed token for ``subject_id``."""
        payload = {"sub": subject_id, "iat": int(time.time())}
        raw = json.dumps(payload, separators=(",", ":")).encode()
        encoded = urlsafe_b64encode(raw).decode()
        return encoded + "." + self._sign(encoded)

    def verify(self, token: str) -> Optional[str]:
        """
        Verify token and return the subject id.

        Returns ``None`` for anything that is not an untampered token signed
        with this secret.
        """
        if not isinstance(token, str):
            return None
        parts = token.split(".")
        if len(parts) != 2:
            return None
        encoded, signature = parts
        if not hmac.compare_digest(
            signature.encode("utf-8", "replace"), self._sign(encoded).encode()
        ):
            return None
        try:
            raw = urlsafe_b64decode(encoded.encode())
            payload = json.loads(raw)
        except (binascii.Error, ValueError) as exc:
            logger.debug("Rejected signed token with unreadable payload: %s", exc)
            return None
        subject = payload.get("sub") if isinstance(payload, dict) else None
        if not isinstance(subject, str) or not subject:
            return None
        return subject
