"""공통 설정 모듈(Common configuration module)."""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """분석 코어 환경설정(Analysis core settings).

    Provider credentials are deliberately absent: they arrive per call in
    ``RequestConfig``.
    """

    model_config = SettingsConfigDict(
        env_prefix="OA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="osint-analyst", description="서비스 이름(Service name)")
    environment: str = Field(default="development", description="실행 환경(Runtime environment)")

    cache_ttl_seconds: int = Field(
        default=3600,
        description="분석 응답 캐시 TTL(Analysis response cache TTL in seconds)",
    )
    cache_backend: Literal["memory", "redis"] = Field(
        default="memory",
        description="세션 저장소 종류(Session store backend)",
    )
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis 접속 URL(Redis connection URL)")

    request_timeout_seconds: float | None = Field(
        default=None,
        description="HTTP 요청 시간 제한, 없으면 무제한(HTTP timeout; None waits indefinitely)",
    )
    anthropic_version: str = Field(
        default="2023-06-01",
        description="Anthropic 프로토콜 버전 헤더(Anthropic protocol version header)",
    )

    log_level: str = Field(default="INFO", description="로그 레벨(Log level)")
    log_json: bool = Field(default=False, description="JSON 로그 출력 여부(Emit JSON log lines)")

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be positive")
        return v

    @field_validator("request_timeout_seconds", mode="before")
    @classmethod
    def parse_timeout(cls, v: Any) -> Any:
        """Treat blank or non-positive values as "no timeout"."""
        if v is None:
            return None
        if isinstance(v, str):
            v = v.strip()
            if not v or v.lower() in {"none", "null"}:
                return None
        if float(v) <= 0:
            return None
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """설정 인스턴스 반환(Return a cached settings instance)."""

    return Settings()


def build_settings(overrides: Dict[str, Any] | None = None) -> Settings:
    """재정의 값으로 새 설정 생성(Build an uncached settings instance with overrides)."""

    return Settings(**(overrides or {}))
