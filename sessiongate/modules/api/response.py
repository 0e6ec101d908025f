"""
Response dispatcher gating a handler behind the verifier.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from fastapi import Request, Response

from ...config.provider import DEFAULT_COOKIE_MAX_AGE, SESSION_COOKIE_NAME
from ..auth.verifier import Verifier

logger = logging.getLogger(__name__)

INTERNAL_ERROR_REASON = "Internal authentication error"

SuccessCallback = Callable[[Request, Response, Optional[str]], Union[Any, Awaitable[Any]]]
ErrorCallback = Callable[[Response, str], Union[Any, Awaitable[Any]]]


def build_session_cookie(
    token: str, name: str = SESSION_COOKIE_NAME, max_age: int = DEFAULT_COOKIE_MAX_AGE
) -> str:
    """Format the Set-Cookie value for a session token (host-only, no Domain)."""
    return f"{name}={token}; Max-Age={max_age}; HttpOnly; Secure; Path=/"


async def _maybe_await(value):
    if inspect.isawaitable(value):
        return await value
    return value


class ApiResponse:
    """
    Runs verification for one request and hands off to a callback.

    On success the callback receives (request, response, new_cookie); a
    freshly minted cookie is already attached to ``response``. On failure the
    error callback receives (response, reason).
    """

    def __init__(
        self,
        request: Request,
        response: Response,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        verifier: Verifier,
        cookie_name: str = SESSION_COOKIE_NAME,
        cookie_max_age: int = DEFAULT_COOKIE_MAX_AGE,
    ):
        if request is None or response is None or not callable(on_success) or not callable(on_error):
            raise ValueError("ApiResponse requires request, response objects and on_success, on_error callbacks")
        if verifier is None:
            raise ValueError("ApiResponse requires a verifier")
        self._request = request
        self._response = response
        self._on_success = on_success
        self._on_error = on_error
        self._verifier = verifier
        self._cookie_name = cookie_name
        self._cookie_max_age = cookie_max_age

    async def send(self) -> Any:
        """
        Verify the request and dispatch to the matching callback.

        Returns:
            Whatever the invoked callback returns
        """
        try:
            verdict = await self._verifier.verify(self._request)

            if verdict.verified:
                if verdict.new_cookie:
                    self._response.headers["set-cookie"] = build_session_cookie(
                        verdict.new_cookie, self._cookie_name, self._cookie_max_age
                    )
                return await _maybe_await(self._on_success(self._request, self._response, verdict.new_cookie))

            return await _maybe_await(self._on_error(self._response, verdict.reason))
        except Exception:
            logger.exception("Auth verification error")
            return await _maybe_await(self._on_error(self._response, INTERNAL_ERROR_REASON))
