# app/core/llm/providers/base.py

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseLLMProvider(ABC):
    """Abstract base for text-generation providers (async)."""
    name: str  # provider name ('stub', 'gemini')

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Run one request/response round trip for a single prompt.

        Args:
            prompt (str): Complete instruction text.

        Returns:
            str: Generated text, never empty.

        Raises:
            UpstreamError: The service is unreachable, refused the prompt
                or returned unusable output.
        """
        ...


__all__ = ["BaseLLMProvider"]
