"""Authentication interfaces following Black Box Design principles."""
from typing import Protocol

from ..session.results import CreateResult, LookupResult


class CredentialStore(Protocol):
    """Protocol for session record stores - allows swappable implementations."""

    async def find_by_token(self, token: str) -> LookupResult:
        """
        Find a session record by its cookie string.

        Returns:
            Ok(record), NotFound, or Err(message); must not raise for "not found"
        """
        ...

    async def create_record(self, verified: bool) -> CreateResult:
        """
        Create a new session record with a store-generated token.

        Returns:
            Ok(record) or Err(message); never a fabricated record
        """
        ...
