"""분석 코어 에러 클래스 정의(Analysis core error classes)."""
from __future__ import annotations

from typing import Any, Dict, Optional


class AnalysisError(Exception):
    """분석 코어 기본 예외 클래스(Base analysis core exception)."""

    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            error_code: Machine-readable error code (e.g., "CONFIG_ERROR")
            message: Human-readable error message
            details: Additional error context (optional)
        """
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON output."""
        response: Dict[str, Any] = {
            "error": {
                "code": self.error_code,
                "message": self.message,
            }
        }
        if self.details:
            response["error"]["details"] = self.details
        return response


class ConfigError(AnalysisError):
    """설정 오류(Unknown provider or missing credential).

    Raised before any network attempt and never retried.
    """

    def __init__(
        self,
        field: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize with configuration context.

        Args:
            field: Configuration field that is invalid (e.g., "provider_id")
            reason: Why the value is invalid
            details: Additional context
        """
        super().__init__(
            error_code="CONFIG_ERROR",
            message=f"Invalid configuration for '{field}': {reason}",
            details=details or {"field": field, "reason": reason},
        )
        self.field = field
        self.reason = reason


class ProviderError(AnalysisError):
    """공급자 HTTP 오류(Provider returned a non-2xx status)."""

    def __init__(
        self,
        provider_id: str,
        status_code: Optional[int],
        reason: str,
        error_code: str = "PROVIDER_ERROR",
    ) -> None:
        """Initialize with provider context.

        Args:
            provider_id: Provider the call was dispatched to
            status_code: HTTP status code, or None for transport failures
            reason: HTTP status text or transport message
            error_code: Machine-readable error code
        """
        if status_code is None:
            message = f"{provider_id} API error: {reason}"
        else:
            message = f"{provider_id} API error: {status_code} {reason}".rstrip()
        super().__init__(
            error_code=error_code,
            message=message,
            details={"provider_id": provider_id, "status_code": status_code, "reason": reason},
        )
        self.provider_id = provider_id
        self.status_code = status_code
        self.reason = reason


class NetworkError(ProviderError):
    """네트워크 전송 오류(DNS, connection reset, timeout)."""

    def __init__(self, provider_id: str, reason: str) -> None:
        super().__init__(provider_id, None, reason, error_code="NETWORK_ERROR")
