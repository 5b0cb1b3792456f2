# app/core/errors.py
"""Domain exceptions shared by the generation and event-store layers."""

from __future__ import annotations


class AppError(Exception):
    """Base class for all errors raised by the application core."""


class ValidationError(AppError):
    """Required input is missing or empty. Surfaced as HTTP 400."""


class UpstreamError(AppError):
    """
    The generation service was unreachable or returned unusable output.

    ``detail`` keeps the raw reason (SDK message, finish reason, ...) so the
    HTTP layer can relay it verbatim.
    """

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail or message


class NotFoundError(AppError):
    """The event record targeted by a mutation does not exist."""


class StoreUnavailableError(AppError):
    """The remote event store could not serve a request."""


__all__ = [
    "AppError",
    "ValidationError",
    "UpstreamError",
    "NotFoundError",
    "StoreUnavailableError",
]
