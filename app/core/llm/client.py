# app/core/llm/client.py

from __future__ import annotations

import logging
from typing import Optional

from app.core.errors import UpstreamError
from .providers import get_llm_provider
from .providers.base import BaseLLMProvider

log = logging.getLogger(__name__)


class LLMClient:
    """
    Async client for the text-generation service.

    Performs exactly one round trip per ``generate`` call: no retries and no
    caching, so the same prompt may produce different text each time.
    """
    def __init__(self, provider: Optional[BaseLLMProvider] = None) -> None:
        self.provider: BaseLLMProvider = provider or get_llm_provider()
        log.info("LLMClient using provider: %s", self.provider.name)

    async def generate(self, prompt: str) -> str:
        """
        Generate text for a single prompt.

        Args:
            prompt (str): Non-empty instruction text.

        Returns:
            str: The raw generated text.

        Raises:
            ValueError: The prompt is empty.
            UpstreamError: The provider failed or returned nothing usable.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must be a non-empty string")

        log.debug("LLMClient: Calling provider.generate...")
        try:
            text = await self.provider.generate(prompt)
        except UpstreamError:
            raise
        except Exception as e:
            log.exception("LLMClient: provider '%s' raised unexpectedly", self.provider.name)
            raise UpstreamError("Generation service call failed", detail=f"{type(e).__name__}: {e}") from e

        if not isinstance(text, str) or not text.strip():
            raise UpstreamError("Generation service returned empty output")
        log.debug("LLMClient: Provider.generate returned %d chars.", len(text))
        return text


__all__ = ("LLMClient",)
