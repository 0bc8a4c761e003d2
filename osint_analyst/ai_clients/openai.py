"""OpenAI 호환 어댑터 구현(OpenAI-style adapter implementation)."""
from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import ProviderDescriptor, RequestConfig
from ..prompts import SYSTEM_PROMPT
from .base import ProviderAdapter, dig


class OpenAIAdapter(ProviderAdapter):
    """OpenAI 채팅 완성 API 래퍼(Wrapper for OpenAI-style chat completions).

    Also serves OpenAI-compatible vendors such as DeepSeek.
    """

    name = "openai"

    def resolve_endpoint(self, provider: ProviderDescriptor, config: RequestConfig) -> str:
        return f"{provider.base_url}/chat/completions"

    def build_payload(self, model: str, prompt: str, max_tokens: int, temperature: float) -> Dict[str, Any]:
        return {
            "model": model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

    def extract_text(self, data: Any) -> Optional[str]:
        return dig(data, "choices", 0, "message", "content")
