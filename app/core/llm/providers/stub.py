# app/core/llm/providers/stub.py

from __future__ import annotations

import logging

from .base import BaseLLMProvider

log = logging.getLogger(__name__)


class StubLLMProvider(BaseLLMProvider):
    """Returns canned text without calling any API - handy for dev and unit tests."""
    name = "stub"

    def __init__(self) -> None:
        self.calls = 0

    async def generate(self, prompt: str) -> str:
        self.calls += 1
        first_line = next((line.strip() for line in prompt.splitlines() if line.strip()), "")
        log.debug("StubLLMProvider: generate called (#%d)", self.calls)
        return f"[stub draft #{self.calls}] {first_line[:80]}"


__all__ = ["StubLLMProvider"]
