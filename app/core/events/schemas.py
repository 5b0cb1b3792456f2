# app/core/events/schemas.py
"""
Wire shape of an event record.

A record is a flat JSON object: ``{"id", ...user fields, "createdAt", "updatedAt"}``.
The same shape travels through the remote ``/events`` API and the local cache.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

EventRecord = Dict[str, Any]

RESERVED_FIELDS = frozenset({"id", "createdAt", "updatedAt"})


def user_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop store-owned keys from client-supplied data."""
    return {key: value for key, value in data.items() if key not in RESERVED_FIELDS}


__all__: list[str] = ["EventRecord", "RESERVED_FIELDS", "user_fields"]
