"""
Tests for RedisRequestContextStore.

Covers:
- Key pattern and TTL
- save/get round trip through JSON
- Missing and corrupt payloads
- delete
- Lazy client creation
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from redis.exceptions import RedisError

from src.domain.shared.exceptions import InvalidMatchRequestError, RequestNotFoundError
from src.infrastructure.persistence.redis import RedisRequestContextStore


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def mock_redis():
    """In-memory stand-in for the redis-py client (get/set/delete)."""
    storage: dict[str, str] = {}
    redis = MagicMock()
    redis.set.side_effect = lambda key, value, ex=None: storage.__setitem__(key, value)
    redis.get.side_effect = storage.get
    redis.delete.side_effect = lambda key: 1 if storage.pop(key, None) is not None else 0
    redis.storage = storage
    return redis


@pytest.fixture
def store(mock_redis):
    return RedisRequestContextStore(redis=mock_redis, ttl_s=600)


# ============================================================================
# TESTS
# ============================================================================


def test_key_pattern():
    assert RedisRequestContextStore._get_key("req-1") == "match_request:req-1"


def test_ttl_defaults_from_env(monkeypatch):
    monkeypatch.setenv("REQUEST_CONTEXT_TTL", "120")

    assert RedisRequestContextStore(redis=MagicMock()).ttl_s == 120


@pytest.mark.asyncio
async def test_save_writes_json_with_ttl(store, mock_redis, sample_request):
    await store.save(sample_request)

    key, payload = mock_redis.set.call_args.args
    assert key == "match_request:req-001"
    assert mock_redis.set.call_args.kwargs == {"ex": 600}
    assert json.loads(payload)["style_category"] == "japanese"


@pytest.mark.asyncio
async def test_get_request_context_round_trip(store, sample_request):
    await store.save(sample_request)

    loaded = await store.get_request_context("req-001")

    assert loaded == sample_request


@pytest.mark.asyncio
async def test_get_missing_request_raises_not_found(store):
    with pytest.raises(RequestNotFoundError) as exc_info:
        await store.get_request_context("missing")

    assert exc_info.value.request_id == "missing"


@pytest.mark.asyncio
async def test_get_corrupt_payload_raises_invalid_request(store, mock_redis):
    mock_redis.storage["match_request:bad"] = "{not json"

    with pytest.raises(InvalidMatchRequestError, match="not valid JSON"):
        await store.get_request_context("bad")


@pytest.mark.asyncio
async def test_delete(store, sample_request):
    await store.save(sample_request)

    assert await store.delete("req-001") is True
    assert await store.delete("req-001") is False


@pytest.mark.asyncio
async def test_delete_propagates_redis_error(store, mock_redis):
    mock_redis.delete.side_effect = RedisError("connection lost")

    with pytest.raises(RedisError):
        await store.delete("req-001")


def test_client_is_created_lazily():
    with patch(
        "src.infrastructure.persistence.redis.request_context_store.get_redis_client"
    ) as get_client:
        store = RedisRequestContextStore(ttl_s=60)
        get_client.assert_not_called()

        assert store.redis is get_client.return_value
        get_client.assert_called_once()
