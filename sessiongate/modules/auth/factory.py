"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the authentication stack based on configuration
- Wires the session store into the verifier
- Returns only the verifier (hiding implementation)
"""

import logging
from typing import Any

from ...config.provider import ConfigProvider
from ..session import SessionStore
from .verifier import Verifier

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates the session store
    - Injects the configured shared password
    - Returns only the public interface
    """

    @staticmethod
    def build(config_provider: ConfigProvider, redis_client: Any) -> Verifier:
        """
        Build the complete authentication stack.

        Args:
            config_provider: Configuration provider
            redis_client: Async Redis client backing the session store

        Returns:
            Verifier ready to check requests

        Raises:
            ValueError: If the shared password is not configured
        """
        auth_config = config_provider.get_auth_config()
        store = SessionStore(redis_client)
        logger.info("Building authentication stack with Redis session store")
        return Verifier(store, auth_config.data_password)
