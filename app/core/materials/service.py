# app/core/materials/service.py

"""Service layer turning generation requests into prompts and LLM calls."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from app.core.llm.client import LLMClient
from .prompts import build_prompt, build_quick_prompt
from .schemas import (
    AllMaterialsResult,
    GenerationRequest,
    GenerationResult,
    MaterialKind,
)

log = logging.getLogger(__name__)


class MaterialsService:
    """
    Generates marketing materials for an event description.

    One operation per material kind plus ``all_materials``, which fans out
    four independent generations and succeeds only if all four do.
    """

    def __init__(self, llm: Optional[LLMClient] = None) -> None:
        self._llm = llm

    @property
    def llm(self) -> LLMClient:
        # Built on first use, after the request has been validated.
        if self._llm is None:
            self._llm = LLMClient()
        return self._llm

    # ------------------------------------------------------------------ #
    #                         per-kind operations                         #
    # ------------------------------------------------------------------ #

    async def event_plan(self, description: Optional[str], language: Optional[str] = None) -> GenerationResult:
        return await self.generate(GenerationRequest.create(MaterialKind.EVENT_PLAN, description, language))

    async def poster(self, description: Optional[str], language: Optional[str] = None) -> GenerationResult:
        return await self.generate(GenerationRequest.create(MaterialKind.POSTER, description, language))

    async def email(
        self,
        description: Optional[str],
        language: Optional[str] = None,
        recipients: Optional[str] = None,
    ) -> GenerationResult:
        return await self.generate(
            GenerationRequest.create(MaterialKind.EMAIL, description, language, recipients=recipients)
        )

    async def caption(
        self,
        description: Optional[str],
        language: Optional[str] = None,
        style: Optional[str] = None,
    ) -> GenerationResult:
        return await self.generate(
            GenerationRequest.create(MaterialKind.CAPTION, description, language, style=style)
        )

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Build one prompt, issue one generation and tag the result."""
        prompt = build_prompt(request)
        log.info("Generating %s (language=%s)", request.kind.value, request.language)
        text = await self.llm.generate(prompt)
        return GenerationResult(kind=request.kind, text=text, language=request.language)

    # ------------------------------------------------------------------ #
    #                            aggregate                                #
    # ------------------------------------------------------------------ #

    async def all_materials(self, description: Optional[str], language: Optional[str] = None) -> AllMaterialsResult:
        """
        Generate all four materials concurrently.

        The first failure cancels the generations still in flight and is
        re-raised; no partial aggregate is ever returned.
        """
        # Validates the description once for all four kinds.
        request = GenerationRequest.create(MaterialKind.EVENT_PLAN, description, language)
        language = request.language

        tasks: Dict[MaterialKind, asyncio.Task[str]] = {
            kind: asyncio.create_task(self.llm.generate(build_quick_prompt(kind, request.description, language)))
            for kind in MaterialKind
        }
        log.info("Generating all materials (language=%s)", language)
        try:
            texts = await asyncio.gather(*tasks.values())
        except Exception:
            pending = [task for task in tasks.values() if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            log.warning("All-materials generation failed; cancelled %d pending call(s)", len(pending))
            raise

        results = {
            kind: GenerationResult(kind=kind, text=text, language=language)
            for kind, text in zip(tasks, texts)
        }
        return AllMaterialsResult(
            description=request.description,
            language=language,
            event_plan=results[MaterialKind.EVENT_PLAN],
            poster=results[MaterialKind.POSTER],
            email=results[MaterialKind.EMAIL],
            caption=results[MaterialKind.CAPTION],
        )


__all__ = ["MaterialsService"]
