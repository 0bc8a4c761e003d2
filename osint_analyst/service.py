"""LLM 분석 서비스 로직(LLM analysis service logic)."""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from .ai_clients import ProviderAdapter, build_adapters
from .analysis_parsers import parse_analysis_response
from .auth import build_auth_headers
from .cache import Clock, ResponseCache, build_cache_key, build_session_store, epoch_ms
from .config import Settings, get_settings
from .errors import ProviderError
from .logger import get_logger
from .models import (
    AnalysisRequest,
    AnalysisResponse,
    AnalysisType,
    ProviderProtocol,
    RequestConfig,
)
from .observability import bind_request_id, reset_request_id
from .prompts import format_prompt
from .providers import ProviderCatalog

logger = get_logger(__name__)

CONNECTION_TEST_REQUEST = AnalysisRequest(
    input="test",
    input_type="test",
    analysis_type=AnalysisType.GENERAL_INQUIRY,
)


class AnalysisService:
    """다중 공급자 LLM 분석 오케스트레이터(Multi-provider LLM analysis orchestrator).

    One adapter instance exists per protocol family; a request is routed by the
    provider descriptor's protocol. Responses are cached by request
    fingerprint. There are no retries and concurrent identical requests are not
    coalesced: both miss, both call out, and the last one to finish wins the
    cache entry.
    """

    def __init__(
        self,
        catalog: Optional[ProviderCatalog] = None,
        cache: Optional[ResponseCache] = None,
        adapters: Optional[Dict[ProviderProtocol, ProviderAdapter]] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Clock = epoch_ms,
    ) -> None:
        settings = settings or get_settings()
        self._catalog = catalog or ProviderCatalog()
        self._cache = cache or ResponseCache(
            store=build_session_store(settings),
            ttl_ms=settings.cache_ttl_seconds * 1000,
            clock=clock,
        )
        self._adapters = adapters or build_adapters(
            timeout=settings.request_timeout_seconds,
            transport=transport,
            anthropic_version=settings.anthropic_version,
        )

    @property
    def catalog(self) -> ProviderCatalog:
        return self._catalog

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    async def analyze(self, request: AnalysisRequest, config: RequestConfig) -> AnalysisResponse:
        """분석 실행(Run one analysis, serving from cache when possible).

        Raises:
            ConfigError: Unknown provider or missing credential
            ProviderError: Non-2xx reply or transport failure (NetworkError)
        """
        token = bind_request_id()
        try:
            provider = self._catalog.require(config.provider_id)
            headers = build_auth_headers(provider.auth_scheme, config.api_key)
            if provider.models and provider.get_model(config.model_id) is None:
                logger.warning("Model %s is not listed for provider %s", config.model_id, provider.id)

            cache_key = build_cache_key(request, config)
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return cached

            adapter = self._adapters[provider.protocol]
            endpoint = adapter.resolve_endpoint(provider, config)
            prompt = format_prompt(request)
            logger.info(
                "Dispatching %s analysis to %s/%s",
                request.analysis_type.value,
                provider.id,
                config.model_id,
            )
            try:
                analysis_text = await adapter.send_chat(
                    endpoint,
                    headers,
                    config.model_id,
                    prompt,
                    config.max_tokens,
                    config.temperature,
                    api_key=config.api_key,
                    provider_id=provider.id,
                )
            except ProviderError as exc:
                logger.error("LLM analysis error: %s", exc)
                raise

            response = parse_analysis_response(analysis_text, request)
            logger.debug(
                "Parsed analysis: risk=%s confidence=%.2f indicators=%d next_steps=%d",
                response.risk_level.value,
                response.confidence,
                len(response.indicators),
                len(response.next_steps),
            )
            await self._cache.put(cache_key, response)
            return response
        finally:
            reset_request_id(token)

    async def aclose(self) -> None:
        """리소스 정리(Release the cache store connection)."""

        await self._cache.aclose()

    async def test_connection(self, config: RequestConfig) -> bool:
        """연결 확인(Return True when a trivial analysis succeeds)."""

        try:
            await self.analyze(CONNECTION_TEST_REQUEST, config)
        except Exception as exc:
            logger.error("Connection test failed: %s", exc)
            return False
        return True
