"""Result types returned by the session store."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class SessionRecord:
    """One issued, store-backed session credential."""

    record_id: str
    cookie_string: str
    is_verified: bool

    @property
    def token(self) -> str:
        return self.cookie_string


@dataclass(frozen=True)
class Ok:
    record: SessionRecord


@dataclass(frozen=True)
class Err:
    message: str


@dataclass(frozen=True)
class _NotFound:
    def __repr__(self) -> str:
        return "NotFound"


NotFound = _NotFound()

LookupResult = Union[Ok, Err, _NotFound]
CreateResult = Union[Ok, Err]


@dataclass
class CookieState:
    """
    Flat result of the standalone cookie operations.

    On a successful create, ``message`` carries the new cookie string.
    ``error`` is True only for invalid input or store failures; a cookie
    that simply does not exist is ``success=False, error=False``.
    """

    success: bool
    id: Optional[str]
    verified: Optional[bool]
    message: str = ""
    error: bool = False
