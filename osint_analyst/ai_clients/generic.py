"""사용자 지정 엔드포인트 어댑터 구현(Generic/custom endpoint adapter implementation)."""
from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import ProviderDescriptor, RequestConfig
from .base import ProviderAdapter, dig


class GenericAdapter(ProviderAdapter):
    """OpenAI 형태의 사용자 지정 API 래퍼(Wrapper for custom OpenAI-shaped APIs)."""

    name = "custom"

    def resolve_endpoint(self, provider: ProviderDescriptor, config: RequestConfig) -> str:
        return config.custom_endpoint or f"{provider.base_url}/chat/completions"

    def build_payload(self, model: str, prompt: str, max_tokens: int, temperature: float) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    def extract_text(self, data: Any) -> Optional[str]:
        return dig(data, "choices", 0, "message", "content") or dig(data, "response")
