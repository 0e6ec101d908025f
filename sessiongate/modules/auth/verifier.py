"""
Verification of request credentials.

The inline Basic credential is checked first and always wins over a session
cookie. A successful Basic check mints a new session record; a cookie check
only ever reads from the store.
"""

import base64
import binascii
import logging
import secrets
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from ..session.results import Err, Ok
from .extractor import Credentials, extract_credentials
from .interfaces import CredentialStore

logger = logging.getLogger(__name__)

BASIC_PREFIX = "Basic "

REASON_INVALID_PATTERN = "Invalid Authorization pattern"
REASON_PASSWORD_MISMATCH = "Password does not match"
REASON_HEADER_VERIFIED = "Authorization header verified"
REASON_NO_CREDENTIALS = "No Authorization header or session cookie found"
REASON_COOKIE_NOT_FOUND = "Session cookie not found"
REASON_COOKIE_NOT_VERIFIED = "Session cookie is not verified"
REASON_COOKIE_VERIFIED = "Session cookie verified"


@dataclass(frozen=True)
class Verdict:
    """Per-request verification outcome."""

    verified: bool
    reason: str
    new_token: Optional[str] = None

    @property
    def new_cookie(self) -> Optional[str]:
        """The freshly minted token, under the name the handler layer uses."""
        return self.new_token

    def to_dict(self) -> dict:
        return {"verified": self.verified, "reason": self.reason, "newCookie": self.new_token}


class Verifier:
    """
    Decides whether a request is authenticated.

    Holds no per-request state: each call performs at most one store
    round-trip (a lookup or an insert, never both).
    """

    def __init__(self, store: CredentialStore, expected_password: str):
        """
        Initialize verifier.

        Args:
            store: Session record store
            expected_password: Shared secret expected in the Basic credential
        """
        if not expected_password:
            raise ValueError("Verifier requires a non-empty expected password")
        self.store = store
        self._expected = expected_password.encode("utf-8")

    async def verify(self, request: Request) -> Verdict:
        """Extract credentials from the request and verify them."""
        return await self.verify_credentials(extract_credentials(request))

    async def verify_credentials(self, credentials: Credentials) -> Verdict:
        """
        Verify extracted credentials.

        Args:
            credentials: Authorization header and/or session cookie

        Returns:
            Verdict with a new token only after a successful Basic check
        """
        if credentials.authorization:
            return await self._verify_authorization(credentials.authorization)

        if not credentials.session_token:
            return Verdict(False, REASON_NO_CREDENTIALS)

        return await self._verify_session_token(credentials.session_token)

    async def _verify_authorization(self, authorization: str) -> Verdict:
        if not authorization.startswith(BASIC_PREFIX):
            return Verdict(False, REASON_INVALID_PATTERN)

        if not self._password_matches(authorization[len(BASIC_PREFIX):]):
            return Verdict(False, REASON_PASSWORD_MISMATCH)

        # Verification already succeeded; a failed insert only skips the cookie
        try:
            result = await self.store.create_record(verified=True)
        except Exception as e:
            logger.error(f"Unexpected error creating cookie: {e}")
            return Verdict(True, REASON_HEADER_VERIFIED, None)

        if isinstance(result, Ok):
            return Verdict(True, REASON_HEADER_VERIFIED, result.record.cookie_string)

        logger.error(f"Session record not created after password match: {result.message}")
        return Verdict(True, REASON_HEADER_VERIFIED, None)

    def _password_matches(self, encoded: str) -> bool:
        # Clients may omit trailing "=" padding
        encoded = encoded.strip()
        encoded += "=" * (-len(encoded) % 4)
        try:
            decoded = base64.b64decode(encoded)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Error decoding auth header: {e}")
            return False
        return secrets.compare_digest(decoded, self._expected)

    async def _verify_session_token(self, token: str) -> Verdict:
        try:
            result = await self.store.find_by_token(token)
        except Exception as e:
            logger.error(f"Unexpected error checking cookie: {e}")
            return Verdict(False, REASON_COOKIE_NOT_FOUND)

        if isinstance(result, Err):
            logger.error(f"Session cookie lookup failed: {result.message}")
            return Verdict(False, REASON_COOKIE_NOT_FOUND)

        if not isinstance(result, Ok):
            return Verdict(False, REASON_COOKIE_NOT_FOUND)

        if not result.record.is_verified:
            return Verdict(False, REASON_COOKIE_NOT_VERIFIED)

        return Verdict(True, REASON_COOKIE_VERIFIED)
