"""Settings endpoints — store, POS and notification sections."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from flowtap.application.schemas import OperationEnvelope
from flowtap.application.services import AppContext, SettingsService
from flowtap.domain.entities import EntityKind
from flowtap.domain.exceptions import EntityNotFoundError
from flowtap.infrastructure.dependencies import get_app_context
from flowtap.presentation.api.v1.mappers import envelope, resolve_service

router = APIRouter(prefix="/settings", tags=["Settings"])


def _settings_service(context: AppContext) -> SettingsService:
    return resolve_service(context, EntityKind.SETTINGS.value, SettingsService)


@router.get("/{section}", response_model=OperationEnvelope)
async def fetch_settings(
    section: str,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service = _settings_service(context)
    try:
        result = await service.fetch_section(section)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return envelope(result, service.store)


@router.put("/{section}", response_model=OperationEnvelope)
async def update_settings(
    section: str,
    payload: dict[str, Any] = Body(...),
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service = _settings_service(context)
    try:
        result = await service.update_section(section, payload)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return envelope(result, service.store)
