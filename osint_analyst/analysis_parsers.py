"""LLM 분석 응답 휴리스틱 파서(Heuristic parsing of free-text LLM analysis replies).

Best-effort keyword mining tuned to the structure requested by the analysis
prompt. Replies in other languages or shapes degrade to the defaults (low risk,
0.8 confidence, empty lists) rather than failing.
"""
from __future__ import annotations

import re
from typing import List, Optional

from .models import AIRecommendation, AnalysisRequest, AnalysisResponse, RiskLevel

MAX_INDICATORS = 5
MAX_NEXT_STEPS = 5
MAX_TOOLS = 5
MAX_RECOMMENDATION_STEPS = 3
MIN_ITEM_LENGTH = 10

DEFAULT_CONFIDENCE = 0.8
RECOMMENDATION_CONFIDENCE = 0.8
RECOMMENDATION_REASONING = "Based on AI analysis of the input and threat assessment"

KNOWN_TOOL_IDS = (
    "virustotal",
    "shodan",
    "urlscan",
    "abuseipdb",
    "greynoise",
    "hybrid-analysis",
    "any-run",
    "threatminer",
    "securitytrails",
)

_CONFIDENCE_RE = re.compile(r"confidence[:\s]*(\d+)%?", re.IGNORECASE)
_ORDINAL_RE = re.compile(r"^\d+\.\s*")
_BULLET_RE = re.compile(r"^[-*]\s*")
_LIST_ITEM_RE = re.compile(r"^(?:\d+\.|[-*])")
# "Indicators: 1. foo" - a label followed by an enumerated item on the same line
_INLINE_LABEL_RE = re.compile(
    r"\b(?:indicators?(?: of compromise)?|iocs?)\s*:\s*(?=(?:\d+\.|[-*])\s)",
    re.IGNORECASE,
)


def _strip_marker(line: str) -> str:
    return _BULLET_RE.sub("", _ORDINAL_RE.sub("", line)).strip()


def extract_risk_level(text: str) -> RiskLevel:
    """위험 등급 추출(Classify risk by keyword priority)."""

    lowered = text.lower()
    if "critical" in lowered or "severe" in lowered:
        return RiskLevel.CRITICAL
    if "high risk" in lowered or "dangerous" in lowered:
        return RiskLevel.HIGH
    if "medium" in lowered or "moderate" in lowered:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def extract_confidence(text: str) -> float:
    """신뢰도 추출(First "confidence N%" mention as a 0-1 fraction)."""

    match = _CONFIDENCE_RE.search(text)
    if not match:
        return DEFAULT_CONFIDENCE
    return min(int(match.group(1)), 100) / 100


def extract_indicators(text: str) -> List[str]:
    """IOC 줄 추출(Lines mentioning indicators/IOCs, in document order)."""

    indicators: List[str] = []
    for line in text.split("\n"):
        lowered = line.lower()
        if "indicator" not in lowered and "ioc" not in lowered:
            continue
        inline = _INLINE_LABEL_RE.search(line)
        candidate = line[inline.end():] if inline else line
        cleaned = _strip_marker(candidate)
        if len(cleaned) > MIN_ITEM_LENGTH:
            indicators.append(cleaned)
            if len(indicators) == MAX_INDICATORS:
                break
    return indicators


def extract_next_steps(text: str) -> List[str]:
    """후속 조치 추출(Enumerated lines after a "next step"/"recommend" trigger).

    Once a trigger line is seen every later list item is a candidate.
    """

    steps: List[str] = []
    triggered = False
    for line in text.split("\n"):
        lowered = line.lower()
        if "next step" in lowered or "recommend" in lowered:
            triggered = True
            continue
        if triggered and _LIST_ITEM_RE.match(line):
            cleaned = _strip_marker(line)
            if len(cleaned) > MIN_ITEM_LENGTH:
                steps.append(cleaned)
                if len(steps) == MAX_NEXT_STEPS:
                    break
    return steps


def extract_recommended_tools(text: str) -> List[str]:
    """알려진 도구 ID 추출(Known tool ids mentioned in the reply, catalog order)."""

    normalized = text.lower().replace("-", " ")
    found = [tool for tool in KNOWN_TOOL_IDS if tool.replace("-", " ") in normalized]
    return found[:MAX_TOOLS]


def extract_recommendations(text: str, next_steps: Optional[List[str]] = None) -> List[AIRecommendation]:
    """도구 추천 생성(Wrap detected tools and the first steps into one recommendation)."""

    steps = next_steps if next_steps is not None else extract_next_steps(text)
    return [
        AIRecommendation(
            tool_ids=extract_recommended_tools(text),
            reasoning=RECOMMENDATION_REASONING,
            confidence=RECOMMENDATION_CONFIDENCE,
            steps=steps[:MAX_RECOMMENDATION_STEPS],
        )
    ]


def parse_analysis_response(text: str, request: Optional[AnalysisRequest] = None) -> AnalysisResponse:
    """원문 응답을 구조화된 분석 결과로 변환(Turn raw reply text into an AnalysisResponse).

    ``request`` is accepted for interface parity and is not used.
    """

    next_steps = extract_next_steps(text)
    return AnalysisResponse(
        analysis_text=text,
        confidence=extract_confidence(text),
        risk_level=extract_risk_level(text),
        indicators=extract_indicators(text),
        next_steps=next_steps,
        recommendations=extract_recommendations(text, next_steps),
    )
