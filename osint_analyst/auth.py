"""공급자 인증 헤더 생성(Provider authentication header builder)."""
from __future__ import annotations

from typing import Dict

from .errors import ConfigError
from .models import AuthKind, AuthScheme

DEFAULT_KEY_HEADER = "X-API-Key"


def build_auth_headers(scheme: AuthScheme, credential: str) -> Dict[str, str]:
    """인증 방식과 자격 증명으로 헤더 생성(Build wire headers for an auth scheme).

    Args:
        scheme: Provider authentication scheme
        credential: Caller-supplied credential

    Returns:
        Header mapping, always including ``Content-Type: application/json``

    Raises:
        ConfigError: The scheme needs a credential and none was supplied
    """
    headers: Dict[str, str] = {"Content-Type": "application/json"}

    if scheme.requires_credential and (not credential or not credential.strip()):
        raise ConfigError("api_key", f"API key is required for {scheme.kind.value} authentication")

    if scheme.kind is AuthKind.BEARER:
        headers["Authorization"] = f"Bearer {credential}"
    elif scheme.kind is AuthKind.HEADER_KEY:
        headers[scheme.header_name or DEFAULT_KEY_HEADER] = credential
    # AuthKind.CUSTOM: adapter adds whatever the provider needs

    return headers
