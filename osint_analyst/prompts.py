"""분석 프롬프트 템플릿(Analysis prompt templates)."""
from __future__ import annotations

from .models import AnalysisRequest

SYSTEM_PROMPT = "You are a cybersecurity expert specializing in OSINT analysis."

ANALYSIS_PROMPT_TEMPLATE = """You are a cybersecurity expert specializing in OSINT (Open Source Intelligence) analysis.

Input: {input}
Input Type: {input_type}
Analysis Type: {analysis_type}
{context_line}

Please provide a comprehensive analysis including:
1. Risk assessment and threat level
2. Relevant indicators of compromise (IOCs)
3. Recommended investigation tools and techniques
4. Next steps for further analysis
5. Confidence level in your assessment

Format your response as a structured analysis that would be useful for a cybersecurity investigator."""


def format_prompt(request: AnalysisRequest) -> str:
    """요청으로부터 고정 구조 프롬프트 생성(Render the fixed-structure analysis prompt)."""

    return ANALYSIS_PROMPT_TEMPLATE.format(
        input=request.input,
        input_type=request.input_type,
        analysis_type=request.analysis_type.value,
        context_line=f"Context: {request.context}" if request.context else "",
    )
