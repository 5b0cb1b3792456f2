# app/core/llm/providers/gemini.py

from __future__ import annotations

import logging
from typing import List, Optional

import google.generativeai as genai
from google.generativeai.types import GenerateContentResponse, GenerationConfig, SafetySettingDict

from app.config import settings
from app.core.errors import UpstreamError
from .base import BaseLLMProvider

log = logging.getLogger(__name__)


class GeminiLLMProvider(BaseLLMProvider):
    name = "gemini"

    DEFAULT_SAFETY_SETTINGS: List[SafetySettingDict] = [
        {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    ]

    def __init__(self, model_name: Optional[str] = None) -> None:
        self.model_name = model_name or settings.GEMINI_MODEL
        self.safety_settings = self.DEFAULT_SAFETY_SETTINGS
        self.generation_config = GenerationConfig(
            temperature=settings.GEMINI_TEMPERATURE,
            candidate_count=1,
        )
        if not settings.GEMINI_API_KEY:
            raise RuntimeError("GEMINI_API_KEY is not configured")
        genai.configure(api_key=settings.GEMINI_API_KEY)
        try:
            self.model = genai.GenerativeModel(
                model_name=self.model_name,
                safety_settings=self.safety_settings,
            )
        except Exception as e:
            log.exception("Failed to initialize GenerativeModel '%s'", self.model_name)
            raise RuntimeError(f"Critical failure: Could not initialize Gemini model {self.model_name}") from e
        log.info("GeminiLLMProvider initialized model %s", self.model_name)

    async def generate(self, prompt: str) -> str:
        log.debug("Gemini generate: prompt='%.70s...'", prompt)
        try:
            response: GenerateContentResponse = await self.model.generate_content_async(
                prompt,
                generation_config=self.generation_config,
                safety_settings=self.safety_settings,
            )
        except Exception as e:
            log.exception("Error during Gemini API call in generate()")
            raise UpstreamError("Gemini request failed", detail=f"{type(e).__name__}: {e}") from e

        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: GenerateContentResponse) -> str:
        try:
            if response.prompt_feedback and response.prompt_feedback.block_reason:
                reason = response.prompt_feedback.block_reason.name
                log.warning("Gemini generate: prompt blocked by safety settings: %s", reason)
                raise UpstreamError("Gemini blocked the prompt", detail=f"block_reason={reason}")
            if not response.candidates:
                log.warning("Gemini generate: response missing 'candidates' field.")
                raise UpstreamError("Gemini returned no candidates")

            candidate = response.candidates[0]
            parts = candidate.content.parts if candidate.content else []
            text = "".join(part.text for part in parts if getattr(part, "text", None)).strip()
            if not text:
                finish_reason = candidate.finish_reason.name if candidate.finish_reason else "UNKNOWN"
                log.warning("Gemini generate: candidate has no text. Finish reason: %s", finish_reason)
                raise UpstreamError("Gemini returned an empty response", detail=f"finish_reason={finish_reason}")
        except (AttributeError, IndexError, KeyError, ValueError) as parse_exc:
            log.exception("Gemini generate: error parsing response structure")
            raise UpstreamError(
                "Gemini returned a malformed response", detail=f"{type(parse_exc).__name__}: {parse_exc}"
            ) from parse_exc

        log.info("Gemini generate: response extracted (%d chars).", len(text))
        return text


__all__ = ["GeminiLLMProvider"]
