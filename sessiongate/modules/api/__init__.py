"""
API Module - Black Box Interface

Purpose: Gate HTTP handlers behind the verifier
Interface: ApiResponse.send(), response models
Hidden: Cookie formatting, exception-to-reason mapping

The API module only orchestrates - it contains no business logic.
All logic is delegated to appropriate modules.
"""

from .models import ErrorResponse, ItemRef
from .response import INTERNAL_ERROR_REASON, ApiResponse, build_session_cookie

__all__ = ["ApiResponse", "ErrorResponse", "INTERNAL_ERROR_REASON", "ItemRef", "build_session_cookie"]
