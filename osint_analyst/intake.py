"""자유 질의를 분석 요청으로 변환(Turn a free-form question into an AnalysisRequest)."""
from __future__ import annotations

import re
from typing import Optional

from .input_detection import detect_input_type
from .models import AnalysisRequest, AnalysisType

_ANALYSIS_VERBS_RE = re.compile(r"analyze|investigate|check|scan", re.IGNORECASE)


def determine_analysis_type(message: str) -> AnalysisType:
    """질의 키워드로 분석 유형 결정(Pick the analysis type from message keywords)."""

    lowered = message.lower()
    if "threat" in lowered or "malicious" in lowered or "dangerous" in lowered:
        return AnalysisType.THREAT_ASSESSMENT
    if "ioc" in lowered or "indicator" in lowered:
        return AnalysisType.IOC_ANALYSIS
    if "tool" in lowered or "recommend" in lowered:
        return AnalysisType.TOOL_RECOMMENDATION
    return AnalysisType.GENERAL_INQUIRY


def build_request(
    message: str,
    current_input: Optional[str] = None,
    input_type: Optional[str] = None,
) -> AnalysisRequest:
    """분석 요청 생성(Build an AnalysisRequest for a user message).

    Args:
        message: What the investigator typed
        current_input: Value currently under investigation, if any
        input_type: Already-known type of ``current_input``

    Returns:
        An analysis request when there is a current input or the message asks
        for analysis, otherwise a general inquiry.
    """
    message = message.strip()
    if current_input or _ANALYSIS_VERBS_RE.search(message):
        subject = current_input or message
        return AnalysisRequest(
            input=subject,
            input_type=input_type or detect_input_type(subject).value,
            context=f"User is investigating: {current_input}. Question: {message}" if current_input else None,
            analysis_type=determine_analysis_type(message),
        )
    return AnalysisRequest(
        input=message,
        input_type="general",
        analysis_type=AnalysisType.GENERAL_INQUIRY,
    )
