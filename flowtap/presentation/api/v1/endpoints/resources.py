"""Generic resource endpoints — list/search/get/create/update/delete for every resource kind.

Each call runs through the request lifecycle and answers with the settled
operation result and the store state after it. Remote failures are part of
that payload (``result.phase == "rejected"``), not HTTP errors.

``search`` is a reserved path segment: ``GET /resources/{kind}/search`` is
matched before ``GET /resources/{kind}/{entity_id}``, so a record whose id is
literally ``"search"`` cannot be fetched by id here. List it and read it from
the collection instead.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status

from flowtap.application.schemas import OperationEnvelope
from flowtap.application.services import AppContext, ResourceService
from flowtap.domain.exceptions import UnsupportedOperationError
from flowtap.infrastructure.dependencies import get_app_context
from flowtap.presentation.api.v1.mappers import envelope, resolve_service, unsupported

router = APIRouter(prefix="/resources", tags=["Resources"])


@router.get("/{kind}", response_model=OperationEnvelope)
async def list_resources(
    kind: str,
    request: Request,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    """Fetch a page of records; query parameters are forwarded unchanged."""
    service: ResourceService = resolve_service(context, kind)
    try:
        result = await service.list_all(dict(request.query_params))
    except UnsupportedOperationError as e:
        raise unsupported(e)
    return envelope(result, service.store)


@router.get("/{kind}/search", response_model=OperationEnvelope)
async def search_resources(
    kind: str,
    q: str = Query(..., description="Search text"),
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: ResourceService = resolve_service(context, kind)
    try:
        result = await service.search(q)
    except UnsupportedOperationError as e:
        raise unsupported(e)
    return envelope(result, service.store)


@router.get("/{kind}/{entity_id}", response_model=OperationEnvelope)
async def get_resource(
    kind: str,
    entity_id: str,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: ResourceService = resolve_service(context, kind)
    try:
        result = await service.get_by_id(entity_id)
    except UnsupportedOperationError as e:
        raise unsupported(e)
    return envelope(result, service.store)


@router.post("/{kind}", response_model=OperationEnvelope, status_code=status.HTTP_201_CREATED)
async def create_resource(
    kind: str,
    payload: dict[str, Any] = Body(...),
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: ResourceService = resolve_service(context, kind)
    try:
        result = await service.create(payload)
    except UnsupportedOperationError as e:
        raise unsupported(e)
    return envelope(result, service.store)


@router.put("/{kind}/{entity_id}", response_model=OperationEnvelope)
async def update_resource(
    kind: str,
    entity_id: str,
    payload: dict[str, Any] = Body(...),
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: ResourceService = resolve_service(context, kind)
    try:
        result = await service.update(entity_id, payload)
    except UnsupportedOperationError as e:
        raise unsupported(e)
    return envelope(result, service.store)


@router.delete("/{kind}/{entity_id}", response_model=OperationEnvelope)
async def delete_resource(
    kind: str,
    entity_id: str,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: ResourceService = resolve_service(context, kind)
    try:
        result = await service.delete(entity_id)
    except UnsupportedOperationError as e:
        raise unsupported(e)
    return envelope(result, service.store)
