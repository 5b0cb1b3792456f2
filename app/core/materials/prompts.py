# app/core/materials/prompts.py
"""Prompt templates for each marketing material. Pure functions, no I/O."""

from __future__ import annotations

from typing import Dict, Optional

from .schemas import (
    DEFAULT_CAPTION_STYLE,
    DEFAULT_RECIPIENTS,
    GenerationRequest,
    MaterialKind,
    is_hindi,
)

EVENT_PLAN_TEMPLATE = """You are an expert event planner. Based on the following event description, create a comprehensive event plan.

Event Description: {description}
Language: {language}

Please provide a detailed event plan including:
1. Event Overview
2. Target Audience
3. Venue Requirements
4. Timeline/Schedule
5. Key Activities
6. Required Resources
7. Budget Considerations
8. Success Metrics

{language_directive}

Format the response in a clear, structured manner."""

POSTER_TEMPLATE = """You are a creative designer. Based on the following event description, create compelling poster content.

Event Description: {description}
Language: {language}

Please provide:
1. Main Headline (catchy and attention-grabbing)
2. Tagline/Subtitle
3. Key Details to Highlight
4. Call-to-Action Text
5. Visual Theme Suggestions
6. Color Scheme Recommendations

{language_directive}

Make it promotional and engaging!"""

EMAIL_TEMPLATE = """You are a professional email writer. Based on the following event information, create a professional email invitation.

Event Description: {description}
Recipients: {recipients}
Language: {language}

Please provide:
1. Subject Line (compelling and clear)
2. Email Body with:
   - Warm greeting
   - Event introduction
   - Key details (date, time, venue if available)
   - What to expect
   - RSVP instructions
   - Professional closing
3. Signature template

{language_directive}

Make it professional yet warm and inviting."""

CAPTION_TEMPLATE = """You are a social media expert. Based on the following event information, create engaging Instagram captions.

Event Description: {description}
Style: {style}
Language: {language}

Please provide:
1. Main Caption (engaging, with emojis)
2. Alternative Caption (different tone)
3. Relevant Hashtags (15-20 hashtags)
4. Call-to-Action
5. Story Ideas (3-4 Instagram story suggestions)

{language_directive}

Make it Instagram-ready with emojis and hashtags!"""

_TEMPLATES: Dict[MaterialKind, str] = {
    MaterialKind.EVENT_PLAN: EVENT_PLAN_TEMPLATE,
    MaterialKind.POSTER: POSTER_TEMPLATE,
    MaterialKind.EMAIL: EMAIL_TEMPLATE,
    MaterialKind.CAPTION: CAPTION_TEMPLATE,
}

# One-line variants used when all four materials are generated at once.
_QUICK_TEMPLATES: Dict[MaterialKind, str] = {
    MaterialKind.EVENT_PLAN: "Create a comprehensive event plan for: {description}.",
    MaterialKind.POSTER: "Create compelling poster content for: {description}.",
    MaterialKind.EMAIL: "Create a professional email invitation for: {description}.",
    MaterialKind.CAPTION: "Create engaging Instagram captions with hashtags for: {description}.",
}

_HINDI_DIRECTIVES: Dict[MaterialKind, str] = {
    MaterialKind.EVENT_PLAN: "Please respond in Hindi (Devanagari script).",
    MaterialKind.POSTER: "Please respond in Hindi (Devanagari script) for all text content.",
    MaterialKind.EMAIL: "Please write the email in Hindi (Devanagari script).",
    MaterialKind.CAPTION: "Please write in Hindi (Devanagari script).",
}

_ENGLISH_DIRECTIVES: Dict[MaterialKind, str] = {
    MaterialKind.EVENT_PLAN: "Please respond in English.",
    MaterialKind.POSTER: "Please respond in English.",
    MaterialKind.EMAIL: "Please write the email in English.",
    MaterialKind.CAPTION: "Please write in English.",
}

# Hashtags stay searchable only in Latin script, whatever the caption language.
HASHTAG_DIRECTIVE = "Keep all hashtags in English (Latin script) for better reach."


def language_directive(kind: MaterialKind, language: Optional[str]) -> str:
    """Instruction selecting the output language, plus the hashtag rule for captions."""
    directives = _HINDI_DIRECTIVES if is_hindi(language) else _ENGLISH_DIRECTIVES
    directive = directives[kind]
    if kind is MaterialKind.CAPTION:
        directive = f"{directive} {HASHTAG_DIRECTIVE}"
    return directive


def build_prompt(request: GenerationRequest) -> str:
    """Render the full per-kind instruction block for ``request``."""
    return _TEMPLATES[request.kind].format(
        description=request.description,
        language=request.language,
        recipients=request.recipients or DEFAULT_RECIPIENTS,
        style=request.style or DEFAULT_CAPTION_STYLE,
        language_directive=language_directive(request.kind, request.language),
    )


def build_quick_prompt(kind: MaterialKind, description: str, language: Optional[str]) -> str:
    """
    build_quick_prompt(MaterialKind.POSTER, "Jazz night", "hindi")
    -> "Create compelling poster content for: Jazz night. Respond in Hindi (Devanagari script)."
    """
    if is_hindi(language):
        directive = "Respond in Hindi (Devanagari script)."
    else:
        directive = "Respond in English."
    if kind is MaterialKind.CAPTION:
        directive = f"{directive} {HASHTAG_DIRECTIVE}"
    return f"{_QUICK_TEMPLATES[kind].format(description=description)} {directive}"


__all__ = [
    "build_prompt",
    "build_quick_prompt",
    "language_directive",
    "HASHTAG_DIRECTIVE",
]
