"""OSINT AI 분석 실행기(OSINT AI analysis command-line runner)."""
from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import Iterable, Optional

from dotenv import load_dotenv

from osint_analyst.errors import AnalysisError
from osint_analyst.intake import build_request
from osint_analyst.logger import get_logger
from osint_analyst.models import RequestConfig
from osint_analyst.service import AnalysisService

# Load .env file at startup
load_dotenv()

logger = get_logger(__name__)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    """커맨드라인 인자 파싱(Parse CLI arguments)."""

    parser = argparse.ArgumentParser(description="OSINT AI 분석 실행기(OSINT AI analyst)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_config_args(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--provider", default="openai", help="공급자 ID(Provider id)")
        sub.add_argument("--model", default="gpt-4o-mini", help="모델 ID(Model id)")
        sub.add_argument(
            "--api-key",
            default=None,
            help="API 키, 기본값 OA_API_KEY(API key; defaults to OA_API_KEY)",
        )
        sub.add_argument("--endpoint", default=None, help="사용자 지정 엔드포인트(Custom endpoint)")
        sub.add_argument("--max-tokens", type=int, default=4000, help="최대 토큰 수(Max tokens)")
        sub.add_argument("--temperature", type=float, default=0.7, help="샘플링 온도(Temperature)")

    analyze = subparsers.add_parser("analyze", help="질의 분석(Analyze a question)")
    analyze.add_argument("message", help="조사 질문(Investigation question)")
    analyze.add_argument("--input", dest="current_input", default=None, help="조사 대상 값(Value under investigation)")
    analyze.add_argument("--input-type", default=None, help="입력 유형 지정(Override detected input type)")
    add_config_args(analyze)

    test = subparsers.add_parser("test-connection", help="공급자 연결 확인(Check provider connectivity)")
    add_config_args(test)

    subparsers.add_parser("providers", help="공급자 목록(List known providers)")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RequestConfig:
    """인자로부터 요청 설정 생성(Build RequestConfig from CLI arguments)."""

    api_key = args.api_key if args.api_key is not None else os.getenv("OA_API_KEY", "")
    return RequestConfig(
        provider_id=args.provider,
        model_id=args.model,
        api_key=api_key,
        custom_endpoint=args.endpoint,
        max_tokens=args.max_tokens,
        temperature=args.temperature,
        is_active=True,
    )


async def main_async(args: argparse.Namespace, service: Optional[AnalysisService] = None) -> int:
    """비동기 메인 루틴(Async main routine)."""

    service = service or AnalysisService()
    try:
        return await _run_command(args, service)
    finally:
        await service.aclose()


async def _run_command(args: argparse.Namespace, service: AnalysisService) -> int:
    if args.command == "providers":
        listing = [
            {
                "id": provider.id,
                "name": provider.display_name,
                "base_url": provider.base_url,
                "models": [model.id for model in provider.models],
            }
            for provider in service.catalog.providers()
        ]
        print(json.dumps(listing, indent=2, ensure_ascii=False))
        return 0

    config = build_config(args)

    if args.command == "test-connection":
        connected = await service.test_connection(config)
        print(json.dumps(connected))
        return 0 if connected else 1

    request = build_request(args.message, current_input=args.current_input, input_type=args.input_type)
    try:
        response = await service.analyze(request, config)
    except AnalysisError as exc:
        logger.error("Analysis failed: %s", exc)
        print(json.dumps(exc.to_dict(), indent=2, ensure_ascii=False))
        return 1

    logger.info("Analysis completed; emitting JSON result.")
    print(json.dumps(response.model_dump(mode="json"), indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    """동기 진입점(Synchronous entrypoint)."""

    args = parse_args(argv)
    return asyncio.run(main_async(args))


if __name__ == "__main__":
    sys.exit(main())
