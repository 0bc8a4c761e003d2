"""분석 응답 캐시 유틸리티(Analysis response cache utilities)."""
from __future__ import annotations

import base64
import json
import time
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Protocol

try:
    import redis.asyncio as redis
except ImportError:  # pragma: no cover - optional dependency
    redis = None  # type: ignore[assignment]

if TYPE_CHECKING:  # pragma: no cover - typing only
    from redis.asyncio import Redis
else:
    Redis = Any

from pydantic import ValidationError

from .config import Settings, get_settings
from .logger import get_logger
from .models import AnalysisRequest, AnalysisResponse, RequestConfig

logger = get_logger(__name__)

CACHE_KEY_PREFIX = "ai-analysis-"
DEFAULT_TTL_MS = 3_600_000

Clock = Callable[[], float]


def epoch_ms() -> float:
    """현재 시각(ms) 반환(Current wall-clock time in epoch milliseconds)."""

    return time.time() * 1000


def build_cache_key(request: AnalysisRequest, config: RequestConfig) -> str:
    """요청 지문으로 캐시 키 생성(Derive the cache key from the request fingerprint).

    The fingerprint is (input, input_type, analysis_type, provider_id, model_id).
    api_key, max_tokens and temperature are not part of it, so requests that
    differ only in those fields share an entry.
    """

    fingerprint = {
        "input": request.input,
        "input_type": request.input_type,
        "analysis_type": request.analysis_type.value,
        "provider_id": config.provider_id,
        "model_id": config.model_id,
    }
    serialized = json.dumps(fingerprint, separators=(",", ":"), ensure_ascii=False)
    return CACHE_KEY_PREFIX + base64.b64encode(serialized.encode("utf-8")).decode("ascii")


class SessionStore(Protocol):
    """세션 범위 키/값 저장소(Session-scoped key/value store)."""

    async def get_item(self, key: str) -> Optional[str]: ...

    async def set_item(self, key: str, value: str) -> None: ...

    async def remove_item(self, key: str) -> None: ...


class MemorySessionStore:
    """프로세스 내 세션 저장소(In-process session store)."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    async def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items


class RedisSessionStore:
    """Redis 기반 세션 저장소(Redis-backed session store).

    Expiry is still decided by ResponseCache against its clock; Redis only
    holds the serialized entries.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        namespace: str = "osint-analyst",
        client: Optional[Redis] = None,
    ) -> None:
        self._redis_url = redis_url or get_settings().redis_url
        self._namespace = namespace
        self._client = client

    def _build_key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def _get_client(self) -> Redis:
        if self._client is None:
            if redis is None:
                raise RuntimeError("redis 라이브러리가 설치되어 있지 않습니다(Redis client not installed)")
            logger.info("Connecting to Redis")
            self._client = redis.from_url(self._redis_url, encoding="utf-8", decode_responses=True)
        return self._client

    async def get_item(self, key: str) -> Optional[str]:
        client = await self._get_client()
        return await client.get(self._build_key(key))

    async def set_item(self, key: str, value: str) -> None:
        client = await self._get_client()
        await client.set(self._build_key(key), value)

    async def remove_item(self, key: str) -> None:
        client = await self._get_client()
        await client.delete(self._build_key(key))

    async def aclose(self) -> None:
        """Redis 연결 종료(Close redis connection)."""

        if self._client is not None:
            await self._client.aclose()
            self._client = None


def build_session_store(settings: Optional[Settings] = None) -> SessionStore:
    """설정에 맞는 세션 저장소 생성(Build the session store selected by settings)."""

    settings = settings or get_settings()
    if settings.cache_backend == "redis":
        return RedisSessionStore(redis_url=settings.redis_url)
    return MemorySessionStore()


class ResponseCache:
    """시간 제한 분석 응답 캐시(Time-boxed analysis response cache).

    Entries are stored as ``{"data": <response>, "timestamp": <epoch ms>}``.
    An entry whose age reaches the TTL is a miss and is deleted on read;
    there is no size-based eviction.
    """

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        ttl_ms: Optional[float] = None,
        clock: Clock = epoch_ms,
    ) -> None:
        self._store = store if store is not None else MemorySessionStore()
        if ttl_ms is None:
            ttl_ms = get_settings().cache_ttl_seconds * 1000
        self._ttl_ms = ttl_ms if ttl_ms > 0 else DEFAULT_TTL_MS
        self._clock = clock

    @property
    def ttl_ms(self) -> float:
        return self._ttl_ms

    async def get(self, key: str) -> Optional[AnalysisResponse]:
        """캐시 값 조회(Get cached response if present and fresh)."""

        try:
            payload = await self._store.get_item(key)
        except Exception as exc:  # pragma: no cover - store failure
            logger.warning("Error reading cached response for %s: %s", key, exc)
            return None

        if payload is None:
            return None

        try:
            entry = json.loads(payload)
            stored_at = float(entry["timestamp"])
            age = self._clock() - stored_at
            if age >= self._ttl_ms:
                logger.debug("Cached response for %s expired (age=%.0fms)", key, age)
                await self._store.remove_item(key)
                return None
            response = AnalysisResponse.model_validate(entry["data"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, ValidationError) as exc:
            logger.warning("Failed to decode cache payload for %s: %s", key, exc)
            return None
        except Exception as exc:  # pragma: no cover - store failure during delete
            logger.warning("Error reading cached response for %s: %s", key, exc)
            return None

        logger.info("Using cached AI analysis response")
        return response

    async def put(self, key: str, value: AnalysisResponse) -> None:
        """캐시에 값 저장(Store response in cache)."""

        payload = json.dumps({"data": value.model_dump(mode="json"), "timestamp": self._clock()})
        try:
            await self._store.set_item(key, payload)
        except Exception as exc:  # pragma: no cover - store failure
            logger.warning("Error caching response for %s: %s", key, exc)

    async def aclose(self) -> None:
        """저장소 연결 종료(Close the backing store if it holds a connection)."""

        close = getattr(self._store, "aclose", None)
        if close is not None:
            await close()
