"""
Session Module - Black Box Interface

Purpose: Persist session records behind the session cookie
Interface: find_by_token(), create_record(), check_cookie_state(), create_cookie()
Hidden: Redis key layout, token generation, serialization

Replaceable with any session backend (database, in-memory, distributed cache).
"""

from .results import CookieState, Err, NotFound, Ok, SessionRecord
from .store import SessionStore

__all__ = ["SessionStore", "SessionRecord", "CookieState", "Ok", "Err", "NotFound"]
