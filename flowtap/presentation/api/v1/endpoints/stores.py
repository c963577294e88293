"""Store selector endpoints — read-only views of every entity store plus flag actions."""

from fastapi import APIRouter, Depends

from flowtap.application.schemas import StoreStateResponse, StoreSummaryResponse
from flowtap.application.services import AppContext
from flowtap.infrastructure.dependencies import get_app_context
from flowtap.presentation.api.v1.mappers import resolve_store, store_state, store_summary

router = APIRouter(prefix="/stores", tags=["Stores"])


@router.get("", response_model=list[StoreSummaryResponse])
async def list_stores(
    context: AppContext = Depends(get_app_context),
) -> list[StoreSummaryResponse]:
    """Phase, loading flag and cached size of every store."""
    return [store_summary(store) for store in context.registry]


@router.get("/{kind}", response_model=StoreStateResponse)
async def get_store(
    kind: str,
    context: AppContext = Depends(get_app_context),
) -> StoreStateResponse:
    return store_state(resolve_store(context, kind))


@router.post("/{kind}/clear-error", response_model=StoreStateResponse)
async def clear_error(
    kind: str,
    context: AppContext = Depends(get_app_context),
) -> StoreStateResponse:
    store = resolve_store(context, kind)
    store.clear_error()
    return store_state(store)


@router.post("/{kind}/clear-message", response_model=StoreStateResponse)
async def clear_message(
    kind: str,
    context: AppContext = Depends(get_app_context),
) -> StoreStateResponse:
    store = resolve_store(context, kind)
    store.clear_message()
    return store_state(store)


@router.post("/{kind}/reset", response_model=StoreStateResponse)
async def reset_store(
    kind: str,
    context: AppContext = Depends(get_app_context),
) -> StoreStateResponse:
    """Drop cached data and flags; outstanding calls still complete."""
    store = resolve_store(context, kind)
    store.reset()
    return store_state(store)
