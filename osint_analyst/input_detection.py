"""조사 입력 유형 탐지(Investigation input type detection)."""
from __future__ import annotations

import re
from enum import Enum


class InputType(str, Enum):
    EMAIL = "email"
    IP = "ip"
    HASH = "hash"
    URL = "url"
    DOMAIN = "domain"
    UNKNOWN = "unknown"


_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_IPV4_RE = re.compile(
    r"^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$"
)
# MD5, SHA1, SHA256
_HASH_RE = re.compile(r"^(?:[a-fA-F0-9]{32}|[a-fA-F0-9]{40}|[a-fA-F0-9]{64})$")
_URL_RE = re.compile(r"^https?://.+")
_DOMAIN_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9-]{0,61}[a-zA-Z0-9]?\.[a-zA-Z]{2,}$")


def detect_input_type(text: str) -> InputType:
    """입력 유형 판별(Classify an investigation input)."""

    trimmed = text.strip()
    if _EMAIL_RE.match(trimmed):
        return InputType.EMAIL
    if _IPV4_RE.match(trimmed):
        return InputType.IP
    if _HASH_RE.match(trimmed):
        return InputType.HASH
    if _URL_RE.match(trimmed):
        return InputType.URL
    if _DOMAIN_RE.match(trimmed):
        return InputType.DOMAIN
    return InputType.UNKNOWN


def sanitize_input(text: str) -> str:
    """스킴과 끝 슬래시 제거(Drop a leading http(s) scheme and one trailing slash)."""

    return re.sub(r"/$", "", re.sub(r"^https?://", "", text)).strip()
