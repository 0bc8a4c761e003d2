"""Test doubles shared across the test modules."""
import json
from typing import Any, Dict, List, Optional

import httpx

ONE_HOUR_MS = 3_600_000


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, start: float = 1_700_000_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.body = body
        self.text = text
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


def openai_body(text: str) -> Dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}
