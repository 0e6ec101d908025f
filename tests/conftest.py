"""
Shared pytest fixtures for SessionGate tests.

This module provides common fixtures including:
- Redis mocks for store/inventory tests
- Request builders for extractor/verifier tests
- Store doubles returning tagged results
"""

import base64
from typing import Dict, Optional
from unittest.mock import AsyncMock

import pytest
from fastapi import Request

from sessiongate.modules.session import Err, NotFound, Ok, SessionRecord


# =============================================================================
# Request Builders
# =============================================================================

def basic_header(secret: str) -> str:
    """Build an HTTP Basic Authorization value for a secret."""
    return "Basic " + base64.b64encode(secret.encode("utf-8")).decode("ascii")


def make_request(
    authorization: Optional[str] = None,
    cookies: Optional[Dict[str, str]] = None,
    path: str = "/api/data",
    query_string: str = "",
) -> Request:
    """Build a Starlette request carrying the given auth material."""
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("latin-1")))
    if cookies:
        cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
        headers.append((b"cookie", cookie_header.encode("latin-1")))

    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": query_string.encode("latin-1"),
        "headers": headers,
    }
    return Request(scope)


# =============================================================================
# Store Doubles
# =============================================================================

@pytest.fixture
def mock_store():
    """
    Credential store double.

    find_by_token returns NotFound and create_record returns a fresh verified
    record unless a test overrides them.
    """
    store = AsyncMock()
    counter = {"n": 0}

    async def create_record(verified):
        counter["n"] += 1
        n = counter["n"]
        return Ok(SessionRecord(record_id=f"id-{n}", cookie_string=f"token-{n}", is_verified=verified))

    store.find_by_token = AsyncMock(return_value=NotFound)
    store.create_record = AsyncMock(side_effect=create_record)
    return store


@pytest.fixture
def record_factory():
    """Build session records for lookup results."""
    def _make(token: str = "abc123", verified: bool = True, record_id: str = "rec-1"):
        return Ok(SessionRecord(record_id=record_id, cookie_string=token, is_verified=verified))
    return _make


@pytest.fixture
def store_error():
    return Err("connection refused")


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

@pytest.fixture
def mock_redis():
    """Create a mock Redis client for async operations."""
    redis = AsyncMock()

    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.smembers = AsyncMock(return_value=set())

    return redis


@pytest.fixture
def mock_redis_with_data():
    """
    Redis mock with in-memory data storage for more realistic tests.

    This allows testing code that reads back what it writes.
    """
    storage = {}
    sets = {}

    redis = AsyncMock()

    async def mock_set(key, value, *args, nx=False, **kwargs):
        if nx and key in storage:
            return None
        storage[key] = value
        return True

    async def mock_get(key):
        return storage.get(key)

    async def mock_smembers(key):
        return set(sets.get(key, set()))

    redis.set = mock_set
    redis.get = mock_get
    redis.smembers = mock_smembers
    redis._storage = storage  # Expose for test assertions
    redis._sets = sets

    return redis


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
