"""
Redis-backed session record store.

Each record is stored as JSON under ``user_cookies:<cookie_string>`` with
no expiry. Records are written once and never mutated here.
"""

import json
import logging
import secrets
import uuid

from redis.exceptions import RedisError

from .results import CookieState, CreateResult, Err, LookupResult, NotFound, Ok, SessionRecord

logger = logging.getLogger(__name__)

KEY_PREFIX = "user_cookies"


class SessionStore:
    def __init__(self, redis_client, token_bytes: int = 32):
        """
        Initialize session store.

        Args:
            redis_client: Async Redis client
            token_bytes: Entropy of generated cookie strings (256 bits by default)
        """
        self.redis = redis_client
        self.token_bytes = token_bytes

    @staticmethod
    def _key(cookie_string: str) -> str:
        return f"{KEY_PREFIX}:{cookie_string}"

    async def find_by_token(self, token: str) -> LookupResult:
        """
        Look up a session record by its cookie string.

        Args:
            token: Cookie string from the session cookie

        Returns:
            Ok(record), NotFound, or Err(message) on store failure
        """
        try:
            data = await self.redis.get(self._key(token))
        except RedisError as e:
            logger.error(f"Database error checking cookie: {e}")
            return Err(str(e))

        if data is None:
            return NotFound

        try:
            row = json.loads(data)
            record = SessionRecord(
                record_id=row["record_id"],
                cookie_string=row["cookie_string"],
                is_verified=bool(row["is_verified"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Malformed session record for cookie lookup: {e}")
            return Err(f"malformed session record: {e}")

        return Ok(record)

    async def create_record(self, verified: bool) -> CreateResult:
        """
        Create a new session record with a freshly generated cookie string.

        Args:
            verified: Value of the record's verified flag

        Returns:
            Ok(record) on success, Err(message) on store failure

        Logic:
        1. Generate cookie string and record id
        2. SET NX so an existing record is never overwritten
        3. Report a collision as a failure rather than retrying
        """
        record = SessionRecord(
            record_id=str(uuid.uuid4()),
            cookie_string=secrets.token_urlsafe(self.token_bytes),
            is_verified=verified,
        )
        row = {
            "record_id": record.record_id,
            "cookie_string": record.cookie_string,
            "is_verified": record.is_verified,
        }

        try:
            created = await self.redis.set(self._key(record.cookie_string), json.dumps(row), nx=True)
        except RedisError as e:
            logger.error(f"Database error creating cookie: {e}")
            return Err(str(e))

        if not created:
            logger.error("Generated cookie string already exists; record not created")
            return Err("cookie string collision")

        return Ok(record)

    async def check_cookie_state(self, cookie) -> CookieState:
        """
        Report the state of a cookie in a flat, caller-friendly shape.

        Args:
            cookie: Cookie string to check

        Returns:
            CookieState; ``error`` is set for invalid input or store failures
        """
        if not cookie or not str(cookie).strip():
            return CookieState(False, None, None, "cookie argument is required", True)

        try:
            result = await self.find_by_token(str(cookie))
        except Exception as e:
            logger.error(f"Unexpected error checking cookie: {e}")
            return CookieState(False, None, None, f"unexpected error fetching the database: {e}", True)

        if isinstance(result, Ok):
            return CookieState(True, result.record.record_id, result.record.is_verified, "", False)
        if isinstance(result, Err):
            return CookieState(
                False, None, None, f"internal error fetching the database: {result.message}", True
            )
        return CookieState(False, None, None, "cookie not found", False)

    async def create_cookie(self, verified=False) -> CookieState:
        """
        Create a cookie record and report it as a CookieState.

        Args:
            verified: Verified flag for the new record (must be a bool)

        Returns:
            CookieState whose ``message`` holds the new cookie string on success
        """
        if not isinstance(verified, bool):
            return CookieState(False, None, None, 'the "verified" parameter must be a boolean', True)

        try:
            result = await self.create_record(verified)
        except Exception as e:
            logger.error(f"Unexpected error creating cookie: {e}")
            return CookieState(False, None, None, f"unexpected error fetching the database: {e}", True)

        if isinstance(result, Err):
            return CookieState(
                False, None, None, f"internal error fetching the database: {result.message}", True
            )
        record = result.record
        return CookieState(True, record.record_id, record.is_verified, record.cookie_string, False)
