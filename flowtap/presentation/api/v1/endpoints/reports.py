"""Report endpoints — each report lands as a named document on the reports store."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from flowtap.application.schemas import OperationEnvelope, StoreStateResponse
from flowtap.application.services import AppContext, ReportService
from flowtap.domain.entities import EntityKind
from flowtap.domain.exceptions import EntityNotFoundError
from flowtap.infrastructure.dependencies import get_app_context
from flowtap.presentation.api.v1.mappers import envelope, resolve_service, store_state

router = APIRouter(prefix="/reports", tags=["Reports"])


def _report_service(context: AppContext) -> ReportService:
    return resolve_service(context, EntityKind.REPORTS.value, ReportService)


@router.get("/{name}", response_model=OperationEnvelope)
async def fetch_report(
    name: str,
    start_date: str | None = Query(None, description="Range start (sales, repairs)"),
    end_date: str | None = Query(None, description="Range end (sales, repairs)"),
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    """Fetch one of: sales, inventory, repairs, customers, dashboard."""
    service = _report_service(context)
    try:
        result = await service.fetch_report(name, start_date, end_date)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return envelope(result, service.store)


@router.delete("", response_model=StoreStateResponse)
async def clear_reports(
    context: AppContext = Depends(get_app_context),
) -> StoreStateResponse:
    service = _report_service(context)
    service.clear_reports()
    return store_state(service.store)
