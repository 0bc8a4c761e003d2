"""분석 코어 데이터 모델(Analysis core data models)."""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AuthKind(str, Enum):
    """인증 방식(Authentication scheme kind)."""

    NONE = "none"
    BEARER = "bearer"
    HEADER_KEY = "header_key"
    CUSTOM = "custom"


class ProviderProtocol(str, Enum):
    """공급자 전송 프로토콜 계열(Provider wire protocol family)."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    GENERIC = "generic"


class AnalysisType(str, Enum):
    """분석 유형(Analysis type)."""

    THREAT_ASSESSMENT = "threat-assessment"
    IOC_ANALYSIS = "ioc-analysis"
    GENERAL_INQUIRY = "general-inquiry"
    TOOL_RECOMMENDATION = "tool-recommendation"


class RiskLevel(str, Enum):
    """위험 등급(Risk level)."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AuthScheme(BaseModel):
    """공급자 인증 방식(Provider authentication scheme)."""

    model_config = ConfigDict(frozen=True)

    kind: AuthKind
    header_name: Optional[str] = Field(default=None, description="header_key 방식의 헤더 이름(Header name)")

    @property
    def requires_credential(self) -> bool:
        return self.kind is not AuthKind.NONE


class ModelDescriptor(BaseModel):
    """모델 설명자(Model descriptor)."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    context_length: int = Field(..., gt=0)
    capabilities: frozenset[str] = Field(default_factory=frozenset)
    description: str = ""
    cost_per_1k_tokens: Optional[float] = Field(default=None, ge=0.0)


class ProviderDescriptor(BaseModel):
    """공급자 설명자(Provider descriptor)."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    base_url: str
    auth_scheme: AuthScheme
    protocol: ProviderProtocol = ProviderProtocol.GENERIC
    models: tuple[ModelDescriptor, ...] = ()
    is_custom: bool = False

    def get_model(self, model_id: str) -> Optional[ModelDescriptor]:
        for model in self.models:
            if model.id == model_id:
                return model
        return None


class RequestConfig(BaseModel):
    """호출자 소유 요청 설정(Caller-owned per-call request configuration)."""

    model_config = ConfigDict(frozen=True)

    provider_id: str = Field(..., description="공급자 ID(Provider id)")
    model_id: str = Field(..., description="모델 ID(Model id)")
    api_key: str = Field(default="", repr=False, description="API 자격 증명(Credential)")
    custom_endpoint: Optional[str] = Field(default=None, description="사용자 지정 엔드포인트(Custom endpoint)")
    max_tokens: int = Field(default=4000, gt=0)
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    is_active: bool = False


class AnalysisRequest(BaseModel):
    """분석 요청 모델(Analysis request model)."""

    model_config = ConfigDict(frozen=True)

    input: str = Field(..., description="조사 대상 값(Investigated value)")
    input_type: str = Field(..., description="탐지된 입력 유형(Detected input type)")
    context: Optional[str] = Field(default=None, description="추가 문맥(Optional context)")
    analysis_type: AnalysisType = AnalysisType.GENERAL_INQUIRY


class AIRecommendation(BaseModel):
    """도구 추천 모델(Tool recommendation model)."""

    model_config = ConfigDict(frozen=True)

    tool_ids: List[str] = Field(default_factory=list, max_length=5)
    reasoning: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    steps: List[str] = Field(default_factory=list, max_length=3)


class AnalysisResponse(BaseModel):
    """분석 결과 모델(Analysis result model)."""

    model_config = ConfigDict(frozen=True)

    analysis_text: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    risk_level: RiskLevel
    indicators: List[str] = Field(default_factory=list, max_length=5)
    next_steps: List[str] = Field(default_factory=list, max_length=5)
    recommendations: List[AIRecommendation] = Field(default_factory=list)
