"""Gemini generateContent 어댑터 구현(Gemini-style adapter implementation)."""
from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import ProviderDescriptor, RequestConfig
from .base import ProviderAdapter, dig


class GeminiAdapter(ProviderAdapter):
    """Gemini API 래퍼(Wrapper for the Gemini generateContent API).

    The credential is sent as the ``key`` query parameter rather than a header.
    """

    name = "gemini"

    def resolve_endpoint(self, provider: ProviderDescriptor, config: RequestConfig) -> str:
        return f"{provider.base_url}/models/{config.model_id}:generateContent"

    def build_params(self, api_key: str) -> Dict[str, str]:
        return {"key": api_key}

    def build_payload(self, model: str, prompt: str, max_tokens: int, temperature: float) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }

    def extract_text(self, data: Any) -> Optional[str]:
        return dig(data, "candidates", 0, "content", "parts", 0, "text")
