"""
Authentication Module - Black Box Interface

Purpose: Decide whether a request may proceed
Interface: extract_credentials(), Verifier.verify(), AuthFactory.build()
Hidden: Credential formats, secret comparison, store lookups

This module can be completely replaced with any other auth implementation
without affecting other modules.
"""

from .extractor import Credentials, extract_credentials
from .factory import AuthFactory
from .verifier import Verdict, Verifier

__all__ = ["AuthFactory", "Credentials", "Verdict", "Verifier", "extract_credentials"]
