# app/api/v1/materials.py

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.core.errors import UpstreamError, ValidationError
from app.core.materials.service import MaterialsService

router = APIRouter(prefix="/api/gemini", tags=["materials"])
log = logging.getLogger(__name__)


class MaterialRequest(BaseModel):
    # Optional here so a missing description becomes our 400 envelope, not a 422.
    description: Optional[str] = Field(None, description="Event description (required)")
    language: Optional[str] = Field(None, description="'english' (default) or 'hindi'")
    recipients: Optional[str] = Field(None, description="Email recipients, e.g. 'guests'")
    style: Optional[str] = Field(None, description="Caption style, e.g. 'engaging'")


def get_materials_service() -> MaterialsService:
    return MaterialsService()


def get_material_request(payload: Optional[MaterialRequest] = Body(None)) -> MaterialRequest:
    # A request without a body is handled like an empty one.
    return payload or MaterialRequest()


def _success(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"success": True, "data": data}


async def _respond(label: str, produce: Callable[[], Awaitable[Dict[str, Any]]]) -> Any:
    """Run ``produce`` and map its outcome onto the JSON envelope."""
    try:
        return _success(await produce())
    except ValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": str(e)},
        )
    except UpstreamError as e:
        log.error("[API /%s] Upstream failure: %s (%s)", label, e, e.detail)
        error = e.detail
    except Exception as e:
        log.exception("[API /%s] Unhandled error", label)
        error = str(e) or type(e).__name__
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": f"Failed to generate {label}", "error": error},
    )


@router.post("/generate-event-plan", summary="Generate an event plan")
async def generate_event_plan(
    payload: MaterialRequest = Depends(get_material_request),
    service: MaterialsService = Depends(get_materials_service),
):
    async def produce() -> Dict[str, Any]:
        return (await service.event_plan(payload.description, payload.language)).to_payload()
    return await _respond("event plan", produce)


@router.post("/generate-poster", summary="Generate poster content")
async def generate_poster(
    payload: MaterialRequest = Depends(get_material_request),
    service: MaterialsService = Depends(get_materials_service),
):
    async def produce() -> Dict[str, Any]:
        return (await service.poster(payload.description, payload.language)).to_payload()
    return await _respond("poster content", produce)


@router.post("/generate-email", summary="Generate an invitation email")
async def generate_email(
    payload: MaterialRequest = Depends(get_material_request),
    service: MaterialsService = Depends(get_materials_service),
):
    async def produce() -> Dict[str, Any]:
        result = await service.email(payload.description, payload.language, recipients=payload.recipients)
        return result.to_payload()
    return await _respond("email draft", produce)


@router.post("/generate-caption", summary="Generate Instagram captions")
async def generate_caption(
    payload: MaterialRequest = Depends(get_material_request),
    service: MaterialsService = Depends(get_materials_service),
):
    async def produce() -> Dict[str, Any]:
        result = await service.caption(payload.description, payload.language, style=payload.style)
        return result.to_payload()
    return await _respond("Instagram caption", produce)


@router.post("/generate-all", summary="Generate all four materials at once")
async def generate_all(
    payload: MaterialRequest = Depends(get_material_request),
    service: MaterialsService = Depends(get_materials_service),
):
    async def produce() -> Dict[str, Any]:
        return (await service.all_materials(payload.description, payload.language)).to_payload()
    return await _respond("marketing materials", produce)
