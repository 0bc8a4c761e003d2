"""Anthropic 메시지 API 어댑터 구현(Anthropic-style adapter implementation)."""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from ..models import ProviderDescriptor, RequestConfig
from .base import ProviderAdapter, dig

DEFAULT_ANTHROPIC_VERSION = "2023-06-01"


class AnthropicAdapter(ProviderAdapter):
    """Anthropic Messages API 래퍼(Wrapper for the Anthropic Messages API)."""

    name = "anthropic"

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        api_version: str = DEFAULT_ANTHROPIC_VERSION,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self._api_version = api_version

    def resolve_endpoint(self, provider: ProviderDescriptor, config: RequestConfig) -> str:
        return f"{provider.base_url}/messages"

    def extra_headers(self) -> Dict[str, str]:
        return {"anthropic-version": self._api_version}

    def build_payload(self, model: str, prompt: str, max_tokens: int, temperature: float) -> Dict[str, Any]:
        return {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

    def extract_text(self, data: Any) -> Optional[str]:
        return dig(data, "content", 0, "text")
