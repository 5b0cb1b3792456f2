# app/core/llm/__init__.py

from __future__ import annotations

from .client import LLMClient
from .providers import BaseLLMProvider, get_llm_provider

__all__ = [
    "LLMClient",
    "BaseLLMProvider",
    "get_llm_provider",
]
