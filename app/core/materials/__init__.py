"""
Marketing-material generation.

* ``build_prompt`` / ``build_quick_prompt`` - prompt templates (prompts.py).
* ``MaterialsService`` - per-kind and all-at-once generation (service.py).
"""
from __future__ import annotations

from .prompts import build_prompt, build_quick_prompt
from .schemas import AllMaterialsResult, GenerationRequest, GenerationResult, MaterialKind
from .service import MaterialsService

__all__: list[str] = [
    "AllMaterialsResult",
    "GenerationRequest",
    "GenerationResult",
    "MaterialKind",
    "MaterialsService",
    "build_prompt",
    "build_quick_prompt",
]
