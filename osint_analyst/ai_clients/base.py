"""공급자 어댑터 인터페이스 정의(Interface definition for provider adapters)."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

import httpx

from ..errors import NetworkError, ProviderError
from ..logger import get_logger
from ..models import ProviderDescriptor, RequestConfig

logger = get_logger(__name__)

NO_RESPONSE_TEXT = "No response generated"


def dig(data: Any, *path: Any) -> Any:
    """중첩 필드 안전 조회(Walk nested dict/list fields, None when any hop is missing)."""

    current = data
    for step in path:
        try:
            current = current[step]
        except (KeyError, IndexError, TypeError):
            return None
    return current


class ProviderAdapter(ABC):
    """공급자 어댑터 공통 인터페이스(Common interface for provider wire protocols).

    Subclasses describe one protocol family: where to POST, what body to send
    and which field of the reply carries the text. The HTTP exchange and its
    failure semantics live here so every family behaves the same way.
    """

    name: str = "provider"

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    @abstractmethod
    def resolve_endpoint(self, provider: ProviderDescriptor, config: RequestConfig) -> str:
        """호출 URL 결정(Resolve the URL this family posts to)."""

    @abstractmethod
    def build_payload(self, model: str, prompt: str, max_tokens: int, temperature: float) -> Dict[str, Any]:
        """요청 본문 생성(Build the JSON request body)."""

    @abstractmethod
    def extract_text(self, data: Any) -> Optional[str]:
        """응답 본문에서 텍스트 추출(Pull the reply text out of the response body)."""

    def build_params(self, api_key: str) -> Dict[str, str]:
        return {}

    def extra_headers(self) -> Dict[str, str]:
        return {}

    async def send_chat(
        self,
        endpoint: str,
        headers: Mapping[str, str],
        model: str,
        prompt: str,
        max_tokens: int,
        temperature: float,
        *,
        api_key: str = "",
        provider_id: Optional[str] = None,
    ) -> str:
        """채팅 호출 후 응답 텍스트 반환(Send one chat request and return the reply text).

        Raises:
            ProviderError: Non-2xx HTTP status
            NetworkError: Transport failure (DNS, connection reset, timeout)
        """
        label = provider_id or self.name
        request_headers = {**headers, **self.extra_headers()}
        payload = self.build_payload(model, prompt, max_tokens, temperature)
        params = self.build_params(api_key)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                logger.debug("Sending %s chat request to %s with model %s", label, endpoint, model)
                response = await client.post(endpoint, headers=request_headers, params=params, json=payload)
        except httpx.TransportError as exc:
            logger.error("%s API network error: endpoint=%s, error=%s", label, endpoint, exc)
            raise NetworkError(label, str(exc) or exc.__class__.__name__) from exc

        logger.debug("%s API response status: %s", label, response.status_code)

        if not response.is_success:
            logger.error(
                "%s API HTTP error: status=%s, endpoint=%s, error_body=%s",
                label,
                response.status_code,
                endpoint,
                response.text[:500],
            )
            if response.status_code == 401:
                logger.error("%s API unauthorized (401). Check your API key.", label)
            elif response.status_code == 429:
                logger.warning("%s API rate limit exceeded (429).", label)
            raise ProviderError(label, response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError:
            logger.warning("%s API returned a non-JSON body; using placeholder text", label)
            return NO_RESPONSE_TEXT

        text = self.extract_text(data)
        if not isinstance(text, str) or not text:
            logger.warning("%s API returned no text content", label)
            return NO_RESPONSE_TEXT
        logger.info("%s API call succeeded", label)
        return text
