"""Unit tests for the provider catalog."""

import pytest

from osint_analyst.errors import ConfigError
from osint_analyst.models import AuthKind, ProviderProtocol
from osint_analyst.providers import DEFAULT_PROVIDERS, ProviderCatalog, make_custom_provider


class TestDefaultCatalog:
    def test_known_providers(self):
        catalog = ProviderCatalog()
        assert [provider.id for provider in catalog.providers()] == ["openai", "anthropic", "google", "deepseek"]

    def test_protocols_and_auth(self):
        catalog = ProviderCatalog()
        openai = catalog.require("openai")
        anthropic = catalog.require("anthropic")
        google = catalog.require("google")
        deepseek = catalog.require("deepseek")

        assert (openai.protocol, openai.auth_scheme.kind) == (ProviderProtocol.OPENAI, AuthKind.BEARER)
        assert anthropic.protocol == ProviderProtocol.ANTHROPIC
        assert anthropic.auth_scheme.kind == AuthKind.HEADER_KEY
        assert anthropic.auth_scheme.header_name == "x-api-key"
        assert (google.protocol, google.auth_scheme.kind) == (ProviderProtocol.GEMINI, AuthKind.CUSTOM)
        assert (deepseek.protocol, deepseek.auth_scheme.kind) == (ProviderProtocol.OPENAI, AuthKind.BEARER)

    def test_models(self):
        provider = ProviderCatalog().require("google")
        model = provider.get_model("gemini-1.5-pro")
        assert model is not None
        assert model.context_length == 2000000
        assert "multimodal" in model.capabilities
        assert provider.get_model("gpt-4o") is None

    def test_all_models_flattens(self):
        pairs = ProviderCatalog().all_models()
        assert len(pairs) == sum(len(provider.models) for provider in DEFAULT_PROVIDERS)
        assert ("deepseek", "deepseek-coder") in [(p.id, m.id) for p, m in pairs]

    def test_unknown_provider(self):
        catalog = ProviderCatalog()
        assert catalog.get("nope") is None
        with pytest.raises(ConfigError):
            catalog.require("nope")


class TestCustomProviders:
    def test_template(self):
        provider = make_custom_provider()
        assert provider.id.startswith("custom-")
        assert provider.is_custom
        assert provider.protocol == ProviderProtocol.GENERIC
        assert provider.auth_scheme.kind == AuthKind.BEARER
        assert [model.id for model in provider.models] == ["custom-model"]
        assert provider.models[0].context_length == 4096

    def test_register_forces_generic_protocol(self):
        catalog = ProviderCatalog()
        template = make_custom_provider(provider_id="custom-x")
        registered = catalog.register(template.model_copy(update={"protocol": ProviderProtocol.OPENAI}))
        assert registered.protocol == ProviderProtocol.GENERIC
        assert catalog.require("custom-x").is_custom

    def test_duplicate_id_rejected(self):
        catalog = ProviderCatalog()
        with pytest.raises(ConfigError):
            catalog.register(make_custom_provider(provider_id="openai"))

    def test_remove(self):
        catalog = ProviderCatalog()
        catalog.register(make_custom_provider(provider_id="custom-x"))
        catalog.remove("custom-x")
        assert catalog.get("custom-x") is None
        catalog.remove("custom-x")

    def test_builtin_cannot_be_removed(self):
        with pytest.raises(ConfigError):
            ProviderCatalog().remove("openai")
