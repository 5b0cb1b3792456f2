# app/core/materials/schemas.py
"""
Pydantic models for marketing-material generation.

Used in:
    * app/core/materials/prompts.py   - prompt rendering
    * app/core/materials/service.py   - dispatcher results
    * app/api/v1/materials.py         - response envelopes
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from app.core.clock import format_timestamp, utcnow
from app.core.errors import ValidationError

DEFAULT_LANGUAGE = "english"
DEFAULT_RECIPIENTS = "guests"
DEFAULT_CAPTION_STYLE = "engaging"
DESCRIPTION_REQUIRED = "Event description is required"


class MaterialKind(str, Enum):
    EVENT_PLAN = "event_plan"
    POSTER = "poster"
    EMAIL = "email"
    CAPTION = "caption"

    @property
    def response_field(self) -> str:
        """Key under which the generated text is returned to the browser."""
        return RESPONSE_FIELDS[self]


RESPONSE_FIELDS: Dict[MaterialKind, str] = {
    MaterialKind.EVENT_PLAN: "eventPlan",
    MaterialKind.POSTER: "posterContent",
    MaterialKind.EMAIL: "emailDraft",
    MaterialKind.CAPTION: "instagramCaption",
}


class GenerationRequest(BaseModel):
    """One material to generate. ``style`` applies to captions, ``recipients`` to emails."""

    kind: MaterialKind
    description: str = Field(..., description="Free-text event description, embedded verbatim")
    language: str = Field(DEFAULT_LANGUAGE, description="Target language; 'hindi' selects Devanagari output")
    style: Optional[str] = Field(None, description="Caption tone (caption only)")
    recipients: Optional[str] = Field(None, description="Audience of the invitation (email only)")

    @classmethod
    def create(
        cls,
        kind: MaterialKind,
        description: Optional[str],
        language: Optional[str] = None,
        *,
        style: Optional[str] = None,
        recipients: Optional[str] = None,
    ) -> "GenerationRequest":
        """
        Build a request, rejecting blank descriptions before anything else runs.

        Raises:
            ValidationError: ``description`` is missing or only whitespace.
        """
        if description is None or not str(description).strip():
            raise ValidationError(DESCRIPTION_REQUIRED)
        return cls(
            kind=kind,
            description=description,
            language=language or DEFAULT_LANGUAGE,
            style=style if kind is MaterialKind.CAPTION else None,
            recipients=recipients if kind is MaterialKind.EMAIL else None,
        )


def is_hindi(language: Optional[str]) -> bool:
    return (language or "").lower() == "hindi"


class GenerationResult(BaseModel):
    """Text produced by one successful upstream call."""

    kind: MaterialKind
    text: str
    language: str
    generated_at: datetime = Field(default_factory=utcnow)

    def to_payload(self) -> Dict[str, Any]:
        return {
            self.kind.response_field: self.text,
            "language": self.language,
            "timestamp": format_timestamp(self.generated_at),
        }


class AllMaterialsResult(BaseModel):
    """All four materials for one description and language. Never partially filled."""

    description: str
    language: str
    event_plan: GenerationResult
    poster: GenerationResult
    email: GenerationResult
    caption: GenerationResult
    generated_at: datetime = Field(default_factory=utcnow)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            result.kind.response_field: result.text
            for result in (self.event_plan, self.poster, self.email, self.caption)
        }
        payload["language"] = self.language
        payload["timestamp"] = format_timestamp(self.generated_at)
        return payload


__all__: list[str] = [
    "MaterialKind",
    "RESPONSE_FIELDS",
    "GenerationRequest",
    "GenerationResult",
    "AllMaterialsResult",
    "DESCRIPTION_REQUIRED",
    "is_hindi",
]
