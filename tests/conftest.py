"""Pytest configuration and shared fixtures."""
from typing import Callable

import httpx
import pytest

from osint_analyst.cache import MemorySessionStore, ResponseCache
from osint_analyst.models import AnalysisRequest, AnalysisType, RequestConfig
from osint_analyst.service import AnalysisService

from helpers import ONE_HOUR_MS, FakeClock, RecordingHandler


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def response_cache(store, clock) -> ResponseCache:
    return ResponseCache(store=store, ttl_ms=ONE_HOUR_MS, clock=clock)


@pytest.fixture
def make_service(response_cache) -> Callable[[RecordingHandler], AnalysisService]:
    """Build an AnalysisService whose HTTP calls go to the given handler."""

    def _factory(handler: RecordingHandler) -> AnalysisService:
        return AnalysisService(cache=response_cache, transport=httpx.MockTransport(handler))

    return _factory


@pytest.fixture
def openai_config() -> RequestConfig:
    return RequestConfig(provider_id="openai", model_id="gpt-4o-mini", api_key="sk-test")


@pytest.fixture
def ip_request() -> AnalysisRequest:
    return AnalysisRequest(
        input="8.8.8.8",
        input_type="ip",
        analysis_type=AnalysisType.THREAT_ASSESSMENT,
    )


@pytest.fixture
def sample_reply() -> str:
    """A reply shaped the way the analysis prompt asks for."""
    return "\n".join(
        [
            "Risk Assessment: The domain shows moderate risk with signs of phishing.",
            "Confidence: 75%",
            "",
            "Indicators of Compromise:",
            "1. Indicator: domain registered 3 days ago",
            "2. IOC - certificate issued by a free CA to a lookalike name",
            "",
            "Recommended tools: VirusTotal, URLScan and Hybrid Analysis.",
            "",
            "Next steps:",
            "1. Submit the URL to urlscan for a live screenshot",
            "2. Check passive DNS history in SecurityTrails",
            "- Query WHOIS for registrant overlap with known campaigns",
            "- short",
            "* Search Shodan for hosts sharing the TLS certificate",
        ]
    )
