"""OSINT 분석 코어 패키지 초기화(OSINT analysis core package init)."""
from . import ai_clients, cache, config, logger
from .errors import AnalysisError, ConfigError, NetworkError, ProviderError
from .models import (
    AIRecommendation,
    AnalysisRequest,
    AnalysisResponse,
    AnalysisType,
    RequestConfig,
    RiskLevel,
)
from .service import AnalysisService

__all__ = [
    "ai_clients",
    "cache",
    "config",
    "logger",
    "AIRecommendation",
    "AnalysisError",
    "AnalysisRequest",
    "AnalysisResponse",
    "AnalysisService",
    "AnalysisType",
    "ConfigError",
    "NetworkError",
    "ProviderError",
    "RequestConfig",
    "RiskLevel",
]
