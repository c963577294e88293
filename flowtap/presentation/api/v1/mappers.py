"""Translate stores, operation results and domain errors into HTTP shapes."""

from typing import Any

from fastapi import HTTPException, status

from flowtap.application.schemas import (
    OperationEnvelope,
    OperationResultResponse,
    PaginationSchema,
    StoreStateResponse,
    StoreSummaryResponse,
)
from flowtap.application.services import (
    AppContext,
    EntityStore,
    OperationResult,
    ResourceService,
)
from flowtap.domain.exceptions import EntityNotFoundError, UnsupportedOperationError


def store_state(store: EntityStore) -> StoreStateResponse:
    state = store.state
    return StoreStateResponse(
        kind=store.kind,
        collection=list(state.collection),
        selected=state.selected,
        request_phase=state.request_phase.value,
        is_loading=state.is_loading,
        error=state.error,
        message=state.message,
        pagination=PaginationSchema(**state.pagination.to_dict()),
        documents=dict(state.documents),
        children={key: list(records) for key, records in state.children.items()},
        in_flight=state.in_flight,
    )


def store_summary(store: EntityStore) -> StoreSummaryResponse:
    state = store.state
    return StoreSummaryResponse(
        kind=store.kind,
        request_phase=state.request_phase.value,
        is_loading=state.is_loading,
        size=len(state.collection),
    )


def envelope(result: OperationResult, store: EntityStore) -> OperationEnvelope:
    return OperationEnvelope(
        result=OperationResultResponse(
            operation=result.operation,
            token=result.token,
            phase=result.phase.value,
            applied=result.applied,
            data=result.data,
            message=result.message,
            error=result.error,
        ),
        state=store_state(store),
    )


def resolve_store(context: AppContext, kind: str) -> EntityStore:
    try:
        return context.registry.get(kind)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def resolve_service(context: AppContext, kind: str, expected: type = ResourceService) -> Any:
    """Service registered for ``kind``; 404 when unknown or of another shape."""
    try:
        service = context.service(kind)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if not isinstance(service, expected):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"'{kind}' is not a {expected.__name__}",
        )
    return service


def unsupported(e: UnsupportedOperationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_405_METHOD_NOT_ALLOWED, detail=str(e))
