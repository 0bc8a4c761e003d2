"""구조화 로깅 및 요청 추적(Structured logging and request tracing)."""
from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

# Correlates every log line emitted during one analyze() call
request_id_ctx: ContextVar[str] = ContextVar("request_id", default="system")


def get_request_id() -> str:
    """요청 ID 조회(Retrieve the current request ID).

    Returns:
        Current request ID from context, or "system" if not set.
    """
    return request_id_ctx.get()


def bind_request_id(request_id: str | None = None) -> Token[str]:
    """새 요청 ID 설정(Bind a request ID to the current context).

    Returns:
        Token to pass to ``reset_request_id`` when the call finishes.
    """
    return request_id_ctx.set(request_id or uuid.uuid4().hex[:12])


def reset_request_id(token: Token[str]) -> None:
    """요청 ID 복원(Restore the previous request ID)."""
    request_id_ctx.reset(token)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """사용자 정의 JSON 포매터(Custom JSON formatter with request ID injection)."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        if "timestamp" not in log_record:
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        log_record.pop("asctime", None)
        log_record["request_id"] = get_request_id()

        if "level" not in log_record:
            log_record["level"] = record.levelname
        if "message" not in log_record:
            log_record["message"] = record.getMessage()
        if "name" not in log_record:
            log_record["name"] = record.name
