"""LLM 공급자 카탈로그(LLM provider catalog)."""
from __future__ import annotations

import time
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import ConfigError
from .logger import get_logger
from .models import AuthKind, AuthScheme, ModelDescriptor, ProviderDescriptor, ProviderProtocol

logger = get_logger(__name__)


DEFAULT_PROVIDERS: Tuple[ProviderDescriptor, ...] = (
    ProviderDescriptor(
        id="openai",
        display_name="OpenAI",
        base_url="https://api.openai.com/v1",
        auth_scheme=AuthScheme(kind=AuthKind.BEARER),
        protocol=ProviderProtocol.OPENAI,
        models=(
            ModelDescriptor(
                id="gpt-4o",
                display_name="GPT-4o",
                description="Most capable model for complex analysis",
                context_length=128000,
                cost_per_1k_tokens=0.005,
                capabilities=frozenset({"reasoning", "analysis", "code", "multimodal"}),
            ),
            ModelDescriptor(
                id="gpt-4o-mini",
                display_name="GPT-4o Mini",
                description="Fast and efficient for most tasks",
                context_length=128000,
                cost_per_1k_tokens=0.00015,
                capabilities=frozenset({"reasoning", "analysis", "code"}),
            ),
            ModelDescriptor(
                id="gpt-3.5-turbo",
                display_name="GPT-3.5 Turbo",
                description="Cost-effective for simple analysis",
                context_length=16385,
                cost_per_1k_tokens=0.0005,
                capabilities=frozenset({"reasoning", "analysis"}),
            ),
        ),
    ),
    ProviderDescriptor(
        id="anthropic",
        display_name="Anthropic",
        base_url="https://api.anthropic.com/v1",
        auth_scheme=AuthScheme(kind=AuthKind.HEADER_KEY, header_name="x-api-key"),
        protocol=ProviderProtocol.ANTHROPIC,
        models=(
            ModelDescriptor(
                id="claude-3-5-sonnet-20241022",
                display_name="Claude 3.5 Sonnet",
                description="Excellent for detailed analysis and reasoning",
                context_length=200000,
                cost_per_1k_tokens=0.003,
                capabilities=frozenset({"reasoning", "analysis", "code", "research"}),
            ),
            ModelDescriptor(
                id="claude-3-haiku-20240307",
                display_name="Claude 3 Haiku",
                description="Fast and efficient for quick analysis",
                context_length=200000,
                cost_per_1k_tokens=0.00025,
                capabilities=frozenset({"reasoning", "analysis"}),
            ),
        ),
    ),
    ProviderDescriptor(
        id="google",
        display_name="Google Gemini",
        base_url="https://generativelanguage.googleapis.com/v1beta",
        # Key travels in the query string, not a header
        auth_scheme=AuthScheme(kind=AuthKind.CUSTOM),
        protocol=ProviderProtocol.GEMINI,
        models=(
            ModelDescriptor(
                id="gemini-1.5-pro",
                display_name="Gemini 1.5 Pro",
                description="Advanced reasoning and multimodal capabilities",
                context_length=2000000,
                cost_per_1k_tokens=0.00125,
                capabilities=frozenset({"reasoning", "analysis", "multimodal", "code"}),
            ),
            ModelDescriptor(
                id="gemini-1.5-flash",
                display_name="Gemini 1.5 Flash",
                description="Fast and efficient for most tasks",
                context_length=1000000,
                cost_per_1k_tokens=0.000075,
                capabilities=frozenset({"reasoning", "analysis", "code"}),
            ),
        ),
    ),
    ProviderDescriptor(
        id="deepseek",
        display_name="DeepSeek",
        base_url="https://api.deepseek.com/v1",
        auth_scheme=AuthScheme(kind=AuthKind.BEARER),
        protocol=ProviderProtocol.OPENAI,
        models=(
            ModelDescriptor(
                id="deepseek-chat",
                display_name="DeepSeek Chat",
                description="Cost-effective model with strong reasoning",
                context_length=32768,
                cost_per_1k_tokens=0.00014,
                capabilities=frozenset({"reasoning", "analysis", "code"}),
            ),
            ModelDescriptor(
                id="deepseek-coder",
                display_name="DeepSeek Coder",
                description="Specialized for code analysis and security",
                context_length=16384,
                cost_per_1k_tokens=0.00014,
                capabilities=frozenset({"code", "security", "analysis"}),
            ),
        ),
    ),
)


def make_custom_provider(
    provider_id: Optional[str] = None,
    display_name: str = "Custom Provider",
    base_url: str = "https://api.example.com/v1",
    auth_scheme: Optional[AuthScheme] = None,
    models: Optional[Iterable[ModelDescriptor]] = None,
) -> ProviderDescriptor:
    """사용자 지정 공급자 템플릿 생성(Build a custom provider descriptor)."""

    if provider_id is None:
        provider_id = f"custom-{int(time.time() * 1000)}"
    if models is None:
        models = [
            ModelDescriptor(
                id="custom-model",
                display_name="Custom Model",
                description="Custom model description",
                context_length=4096,
                capabilities=frozenset({"reasoning", "analysis"}),
            )
        ]
    return ProviderDescriptor(
        id=provider_id,
        display_name=display_name,
        base_url=base_url,
        auth_scheme=auth_scheme or AuthScheme(kind=AuthKind.BEARER),
        protocol=ProviderProtocol.GENERIC,
        models=tuple(models),
        is_custom=True,
    )


class ProviderCatalog:
    """공급자 레지스트리(Registry of known provider descriptors)."""

    def __init__(self, providers: Iterable[ProviderDescriptor] = DEFAULT_PROVIDERS) -> None:
        self._providers: Dict[str, ProviderDescriptor] = {}
        for provider in providers:
            self._providers[provider.id] = provider

    def get(self, provider_id: str) -> Optional[ProviderDescriptor]:
        return self._providers.get(provider_id)

    def require(self, provider_id: str) -> ProviderDescriptor:
        """공급자 조회, 없으면 ConfigError(Look up provider or raise ConfigError)."""

        provider = self._providers.get(provider_id)
        if provider is None:
            raise ConfigError("provider_id", f"Provider {provider_id} not found")
        return provider

    def providers(self) -> List[ProviderDescriptor]:
        return list(self._providers.values())

    def all_models(self) -> List[Tuple[ProviderDescriptor, ModelDescriptor]]:
        return [(provider, model) for provider in self._providers.values() for model in provider.models]

    def register(self, provider: ProviderDescriptor) -> ProviderDescriptor:
        """사용자 지정 공급자 등록(Register a custom provider).

        Custom providers always speak the generic protocol.
        """

        if provider.id in self._providers:
            raise ConfigError("provider_id", f"Provider {provider.id} already registered")
        registered = provider.model_copy(update={"is_custom": True, "protocol": ProviderProtocol.GENERIC})
        self._providers[registered.id] = registered
        logger.info("Registered custom provider %s (%s)", registered.id, registered.base_url)
        return registered

    def remove(self, provider_id: str) -> None:
        provider = self._providers.get(provider_id)
        if provider is None:
            return
        if not provider.is_custom:
            raise ConfigError("provider_id", f"Built-in provider {provider_id} cannot be removed")
        del self._providers[provider_id]
        logger.info("Removed custom provider %s", provider_id)
