"""공급자 어댑터 패키지 초기화(Provider adapters package init)."""
from __future__ import annotations

from typing import Dict, Optional, Type

import httpx

from ..models import ProviderProtocol
from .anthropic import AnthropicAdapter
from .base import NO_RESPONSE_TEXT, ProviderAdapter
from .gemini import GeminiAdapter
from .generic import GenericAdapter
from .openai import OpenAIAdapter

ADAPTERS: Dict[ProviderProtocol, Type[ProviderAdapter]] = {
    ProviderProtocol.OPENAI: OpenAIAdapter,
    ProviderProtocol.ANTHROPIC: AnthropicAdapter,
    ProviderProtocol.GEMINI: GeminiAdapter,
    ProviderProtocol.GENERIC: GenericAdapter,
}


def build_adapters(
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    anthropic_version: Optional[str] = None,
) -> Dict[ProviderProtocol, ProviderAdapter]:
    """프로토콜별 어댑터 인스턴스 생성(Instantiate one adapter per protocol family)."""

    adapters: Dict[ProviderProtocol, ProviderAdapter] = {}
    for protocol, adapter_cls in ADAPTERS.items():
        if adapter_cls is AnthropicAdapter and anthropic_version:
            adapters[protocol] = AnthropicAdapter(timeout=timeout, transport=transport, api_version=anthropic_version)
        else:
            adapters[protocol] = adapter_cls(timeout=timeout, transport=transport)
    return adapters


__all__ = [
    "ADAPTERS",
    "NO_RESPONSE_TEXT",
    "AnthropicAdapter",
    "GeminiAdapter",
    "GenericAdapter",
    "OpenAIAdapter",
    "ProviderAdapter",
    "build_adapters",
]
