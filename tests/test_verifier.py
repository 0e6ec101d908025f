"""
Unit tests for the verifier decision procedure.
"""

import base64
from unittest.mock import AsyncMock

import pytest
from conftest import basic_header, make_request

from sessiongate.modules.auth import Credentials, Verifier
from sessiongate.modules.session import Err, NotFound

PASSWORD = "correct-secret"


@pytest.fixture
def verifier(mock_store):
    """Create a Verifier over the store double."""
    return Verifier(mock_store, PASSWORD)


@pytest.mark.asyncio
async def test_basic_auth_success_mints_token(verifier, mock_store):
    """Test a matching password verifies and returns a new token."""
    verdict = await verifier.verify_credentials(Credentials(authorization=basic_header(PASSWORD)))

    assert verdict.verified is True
    assert verdict.reason == "Authorization header verified"
    assert verdict.new_token == "token-1"
    assert verdict.new_cookie == "token-1"
    mock_store.create_record.assert_awaited_once_with(verified=True)
    mock_store.find_by_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_basic_auth_success_mints_distinct_tokens(verifier, mock_store):
    """Test each successful Basic check mints a fresh token."""
    credentials = Credentials(authorization=basic_header(PASSWORD))

    first = await verifier.verify_credentials(credentials)
    second = await verifier.verify_credentials(credentials)

    assert first.new_token != second.new_token
    assert mock_store.create_record.await_count == 2


@pytest.mark.asyncio
async def test_basic_auth_rotates_even_with_valid_cookie(verifier, mock_store, record_factory):
    """Test the Basic header wins over an existing session cookie."""
    mock_store.find_by_token.return_value = record_factory("abc123", verified=True)

    verdict = await verifier.verify_credentials(
        Credentials(authorization=basic_header(PASSWORD), session_token="abc123")
    )

    assert verdict.verified is True
    assert verdict.new_token == "token-1"
    mock_store.find_by_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_basic_auth_store_failure_still_verified(verifier, mock_store):
    """Test a failed insert skips the cookie but keeps the verdict."""
    mock_store.create_record.side_effect = None
    mock_store.create_record.return_value = Err("insert failed")

    verdict = await verifier.verify_credentials(Credentials(authorization=basic_header(PASSWORD)))

    assert verdict.verified is True
    assert verdict.reason == "Authorization header verified"
    assert verdict.new_token is None


@pytest.mark.asyncio
async def test_basic_auth_store_exception_still_verified(verifier, mock_store):
    """Test an exception from the store during insert does not flip the verdict."""
    mock_store.create_record.side_effect = RuntimeError("boom")

    verdict = await verifier.verify_credentials(Credentials(authorization=basic_header(PASSWORD)))

    assert verdict.verified is True
    assert verdict.new_token is None


@pytest.mark.asyncio
@pytest.mark.parametrize("secret", ["wrong", "correct-secre", "correct-secret ", "CORRECT-SECRET", ""])
async def test_password_mismatch(verifier, mock_store, secret):
    """Test any other secret is rejected and creates nothing."""
    verdict = await verifier.verify_credentials(Credentials(authorization=basic_header(secret)))

    assert verdict.verified is False
    assert verdict.reason == "Password does not match"
    assert verdict.new_token is None
    mock_store.create_record.assert_not_awaited()


@pytest.mark.asyncio
async def test_undecodable_base64_is_mismatch(verifier, mock_store):
    """Test bad base64 is treated as a mismatch rather than raising."""
    verdict = await verifier.verify_credentials(Credentials(authorization="Basic a"))

    assert verdict.verified is False
    assert verdict.reason == "Password does not match"
    mock_store.create_record.assert_not_awaited()


@pytest.mark.asyncio
async def test_unpadded_base64_accepted(verifier, mock_store):
    """Test a credential sent without trailing padding still matches."""
    encoded = base64.b64encode(PASSWORD.encode()).decode().rstrip("=")
    assert not encoded.endswith("=")

    verdict = await verifier.verify_credentials(Credentials(authorization=f"Basic {encoded}"))

    assert verdict.verified is True
    assert verdict.reason == "Authorization header verified"
    mock_store.create_record.assert_awaited_once_with(verified=True)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "authorization",
    [
        "Bearer " + base64.b64encode(PASSWORD.encode()).decode(),
        "basic " + base64.b64encode(PASSWORD.encode()).decode(),
        "Basic" + base64.b64encode(PASSWORD.encode()).decode(),
        base64.b64encode(PASSWORD.encode()).decode(),
    ],
)
async def test_invalid_authorization_pattern(verifier, mock_store, authorization):
    """Test a value without the exact 'Basic ' prefix is rejected."""
    mock_store.find_by_token.return_value = Err("should not be called")

    verdict = await verifier.verify_credentials(
        Credentials(authorization=authorization, session_token="abc123")
    )

    assert verdict.verified is False
    assert verdict.reason == "Invalid Authorization pattern"
    mock_store.create_record.assert_not_awaited()
    mock_store.find_by_token.assert_not_awaited()


@pytest.mark.asyncio
async def test_no_credentials(verifier, mock_store):
    """Test a request without header or cookie never succeeds."""
    verdict = await verifier.verify_credentials(Credentials())

    assert verdict.verified is False
    assert verdict.reason == "No Authorization header or session cookie found"
    mock_store.find_by_token.assert_not_awaited()
    mock_store.create_record.assert_not_awaited()


@pytest.mark.asyncio
async def test_cookie_not_found(verifier, mock_store):
    """Test an unknown token is rejected."""
    mock_store.find_by_token.return_value = NotFound

    verdict = await verifier.verify_credentials(Credentials(session_token="abc123"))

    assert verdict.verified is False
    assert verdict.reason == "Session cookie not found"
    mock_store.find_by_token.assert_awaited_once_with("abc123")


@pytest.mark.asyncio
async def test_cookie_lookup_error_fails_closed(verifier, mock_store, store_error):
    """Test a store error collapses to 'not found'."""
    mock_store.find_by_token.return_value = store_error

    verdict = await verifier.verify_credentials(Credentials(session_token="abc123"))

    assert verdict.verified is False
    assert verdict.reason == "Session cookie not found"


@pytest.mark.asyncio
async def test_cookie_lookup_exception_fails_closed(verifier, mock_store):
    """Test an exception during lookup collapses to 'not found'."""
    mock_store.find_by_token.side_effect = ConnectionError("redis down")

    verdict = await verifier.verify_credentials(Credentials(session_token="abc123"))

    assert verdict.verified is False
    assert verdict.reason == "Session cookie not found"


@pytest.mark.asyncio
async def test_cookie_not_verified(verifier, mock_store, record_factory):
    """Test a record with verified=False is rejected."""
    mock_store.find_by_token.return_value = record_factory("abc123", verified=False)

    verdict = await verifier.verify_credentials(Credentials(session_token="abc123"))

    assert verdict.verified is False
    assert verdict.reason == "Session cookie is not verified"


@pytest.mark.asyncio
async def test_cookie_verified_is_idempotent(verifier, mock_store, record_factory):
    """Test repeated checks of a valid token never mint new records."""
    mock_store.find_by_token.return_value = record_factory("abc123", verified=True)

    verdicts = [
        await verifier.verify_credentials(Credentials(session_token="abc123")) for _ in range(3)
    ]

    for verdict in verdicts:
        assert verdict.verified is True
        assert verdict.reason == "Session cookie verified"
        assert verdict.new_token is None
    assert verdicts[0] == verdicts[1] == verdicts[2]
    mock_store.create_record.assert_not_awaited()


@pytest.mark.asyncio
async def test_verify_reads_request(verifier):
    """Test verify() extracts credentials from the request itself."""
    request = make_request(authorization=basic_header(PASSWORD))

    verdict = await verifier.verify(request)

    assert verdict.verified is True
    assert verdict.new_token == "token-1"


def test_verdict_boundary_shape():
    """Test the verdict is exposed with newCookie at the boundary."""
    from sessiongate.modules.auth import Verdict

    verdict = Verdict(True, "Authorization header verified", "tok")

    assert verdict.to_dict() == {
        "verified": True,
        "reason": "Authorization header verified",
        "newCookie": "tok",
    }


def test_empty_expected_password_rejected():
    """Test a verifier cannot be built without a secret."""
    with pytest.raises(ValueError):
        Verifier(AsyncMock(), "")
