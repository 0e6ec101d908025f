"""Pull authentication material out of an incoming request."""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from ...config.provider import SESSION_COOKIE_NAME


@dataclass(frozen=True)
class Credentials:
    """Raw authentication material; either field may be absent."""

    authorization: Optional[str] = None
    session_token: Optional[str] = None


def extract_credentials(request: Request, cookie_name: str = SESSION_COOKIE_NAME) -> Credentials:
    """
    Extract the Authorization header and session cookie from a request.

    Never touches storage and never raises; empty values count as absent.
    """
    authorization = request.headers.get("authorization") or None
    session_token = request.cookies.get(cookie_name) or None
    return Credentials(authorization=authorization, session_token=session_token)
