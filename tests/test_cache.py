"""Unit tests for the response cache and session stores."""

import base64
import json
from unittest.mock import AsyncMock

import pytest

from osint_analyst.cache import (
    CACHE_KEY_PREFIX,
    MemorySessionStore,
    RedisSessionStore,
    ResponseCache,
    build_cache_key,
    build_session_store,
)
from osint_analyst.config import build_settings
from osint_analyst.models import AnalysisRequest, AnalysisResponse, AnalysisType, RequestConfig, RiskLevel

from helpers import ONE_HOUR_MS


def _response(text: str = "analysis") -> AnalysisResponse:
    return AnalysisResponse(
        analysis_text=text,
        confidence=0.9,
        risk_level=RiskLevel.HIGH,
        indicators=["Indicator: beacon to c2"],
        next_steps=["Block the address"],
    )


REQUEST = AnalysisRequest(input="8.8.8.8", input_type="ip", analysis_type=AnalysisType.THREAT_ASSESSMENT)
CONFIG = RequestConfig(provider_id="openai", model_id="gpt-4o", api_key="one", max_tokens=100, temperature=0.1)


class TestCacheKey:
    def test_deterministic_and_prefixed(self):
        key = build_cache_key(REQUEST, CONFIG)
        assert key == build_cache_key(REQUEST, CONFIG)
        assert key.startswith(CACHE_KEY_PREFIX)

    def test_decodes_to_fingerprint(self):
        key = build_cache_key(REQUEST, CONFIG)
        decoded = json.loads(base64.b64decode(key[len(CACHE_KEY_PREFIX):]))
        assert decoded == {
            "input": "8.8.8.8",
            "input_type": "ip",
            "analysis_type": "threat-assessment",
            "provider_id": "openai",
            "model_id": "gpt-4o",
        }

    def test_ignores_credential_and_generation_parameters(self):
        other = CONFIG.model_copy(update={"api_key": "two", "max_tokens": 9000, "temperature": 1.5})
        assert build_cache_key(REQUEST, other) == build_cache_key(REQUEST, CONFIG)

    def test_ignores_context(self):
        with_context = REQUEST.model_copy(update={"context": "extra"})
        assert build_cache_key(with_context, CONFIG) == build_cache_key(REQUEST, CONFIG)

    @pytest.mark.parametrize(
        "request_update,config_update",
        [
            ({"input": "8.8.4.4"}, {}),
            ({"input_type": "domain"}, {}),
            ({"analysis_type": AnalysisType.IOC_ANALYSIS}, {}),
            ({}, {"provider_id": "deepseek"}),
            ({}, {"model_id": "gpt-4o-mini"}),
        ],
    )
    def test_each_fingerprint_field_changes_key(self, request_update, config_update):
        request = REQUEST.model_copy(update=request_update)
        config = CONFIG.model_copy(update=config_update)
        assert build_cache_key(request, config) != build_cache_key(REQUEST, CONFIG)

    def test_delimiter_lookalikes_do_not_collide(self):
        a = AnalysisRequest(input='a","input_type":"b', input_type="c")
        b = AnalysisRequest(input="a", input_type='b","input_type":"c')
        assert build_cache_key(a, CONFIG) != build_cache_key(b, CONFIG)

    def test_non_ascii_input(self):
        request = AnalysisRequest(input="пример.рф", input_type="domain")
        assert build_cache_key(request, CONFIG).startswith(CACHE_KEY_PREFIX)


class TestResponseCache:
    @pytest.mark.asyncio
    async def test_round_trip(self, response_cache):
        await response_cache.put("k", _response())
        assert await response_cache.get("k") == _response()

    @pytest.mark.asyncio
    async def test_miss(self, response_cache):
        assert await response_cache.get("missing") is None

    @pytest.mark.asyncio
    async def test_entry_format(self, response_cache, store, clock):
        await response_cache.put("k", _response())
        entry = json.loads(await store.get_item("k"))
        assert entry["timestamp"] == clock.now
        assert entry["data"]["risk_level"] == "high"

    @pytest.mark.asyncio
    async def test_fresh_just_before_ttl(self, response_cache, clock):
        await response_cache.put("k", _response())
        clock.advance(ONE_HOUR_MS - 1)
        assert await response_cache.get("k") is not None

    @pytest.mark.asyncio
    async def test_expired_at_ttl_and_deleted(self, response_cache, store, clock):
        await response_cache.put("k", _response())
        clock.advance(ONE_HOUR_MS)
        assert await response_cache.get("k") is None
        assert "k" not in store

    @pytest.mark.asyncio
    async def test_corrupt_entry_is_a_miss(self, response_cache, store, clock):
        await store.set_item("k", "not json")
        assert await response_cache.get("k") is None
        await store.set_item("k", json.dumps({"data": {"bogus": True}, "timestamp": clock.now}))
        assert await response_cache.get("k") is None

    @pytest.mark.asyncio
    async def test_overwrite_refreshes_timestamp(self, response_cache, clock):
        await response_cache.put("k", _response("first"))
        clock.advance(ONE_HOUR_MS - 10)
        await response_cache.put("k", _response("second"))
        clock.advance(100)
        cached = await response_cache.get("k")
        assert cached is not None
        assert cached.analysis_text == "second"

    def test_ttl_defaults_from_settings(self):
        assert ResponseCache(store=MemorySessionStore()).ttl_ms == ONE_HOUR_MS


class TestRedisSessionStore:
    @pytest.mark.asyncio
    async def test_namespaced_operations(self):
        client = AsyncMock()
        client.get.return_value = "payload"
        store = RedisSessionStore(namespace="test", client=client)

        await store.set_item("k", "v")
        assert await store.get_item("k") == "payload"
        await store.remove_item("k")

        client.set.assert_awaited_once_with("test:k", "v")
        client.get.assert_awaited_once_with("test:k")
        client.delete.assert_awaited_once_with("test:k")

    @pytest.mark.asyncio
    async def test_backs_response_cache(self, clock):
        data = {}

        async def fake_set(key, value):
            data[key] = value

        async def fake_get(key):
            return data.get(key)

        client = AsyncMock()
        client.set.side_effect = fake_set
        client.get.side_effect = fake_get
        cache = ResponseCache(store=RedisSessionStore(client=client), ttl_ms=ONE_HOUR_MS, clock=clock)

        await cache.put("k", _response())
        assert await cache.get("k") == _response()
        clock.advance(ONE_HOUR_MS)
        assert await cache.get("k") is None
        client.delete.assert_awaited_once_with("osint-analyst:k")


def test_build_session_store_selects_backend():
    assert isinstance(build_session_store(build_settings({"cache_backend": "memory"})), MemorySessionStore)
    assert isinstance(build_session_store(build_settings({"cache_backend": "redis"})), RedisSessionStore)


class TestClose:
    @pytest.mark.asyncio
    async def test_redis_store_closes_client(self):
        client = AsyncMock()
        store = RedisSessionStore(client=client)

        await store.aclose()
        await store.aclose()

        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cache_closes_store_that_supports_it(self, clock):
        client = AsyncMock()
        cache = ResponseCache(store=RedisSessionStore(client=client), ttl_ms=ONE_HOUR_MS, clock=clock)

        await cache.aclose()

        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cache_close_is_noop_for_memory_store(self, response_cache):
        await response_cache.aclose()
