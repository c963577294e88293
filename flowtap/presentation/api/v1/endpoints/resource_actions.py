"""Kind-specific write and fetch operations that go beyond plain CRUD."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from flowtap.application.schemas import (
    MessageCreate,
    OperationEnvelope,
    RoleUpdate,
    StatusUpdate,
    StockUpdate,
)
from flowtap.application.services import (
    AppContext,
    ConversationService,
    EmployeeService,
    InventoryService,
    RepairService,
    SaleService,
)
from flowtap.domain.entities import EntityKind
from flowtap.infrastructure.dependencies import get_app_context
from flowtap.presentation.api.v1.mappers import envelope, resolve_service

router = APIRouter(prefix="/resources", tags=["Resource actions"])


@router.patch("/inventory/{item_id}/stock", response_model=OperationEnvelope)
async def update_stock(
    item_id: str,
    data: StockUpdate,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: InventoryService = resolve_service(context, EntityKind.INVENTORY.value, InventoryService)
    result = await service.update_stock(item_id, data.quantity)
    return envelope(result, service.store)


@router.patch("/repairs/{repair_id}/status", response_model=OperationEnvelope)
async def update_repair_status(
    repair_id: str,
    data: StatusUpdate,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: RepairService = resolve_service(context, EntityKind.REPAIRS.value, RepairService)
    result = await service.update_status(repair_id, data.status)
    return envelope(result, service.store)


@router.patch("/employees/{employee_id}/role", response_model=OperationEnvelope)
async def update_employee_role(
    employee_id: str,
    data: RoleUpdate,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: EmployeeService = resolve_service(context, EntityKind.EMPLOYEES.value, EmployeeService)
    result = await service.update_role(employee_id, data.role)
    return envelope(result, service.store)


@router.post("/sales/{sale_id}/payment", response_model=OperationEnvelope)
async def process_payment(
    sale_id: str,
    payment: dict[str, Any] = Body(...),
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: SaleService = resolve_service(context, EntityKind.SALES.value, SaleService)
    result = await service.process_payment(sale_id, payment)
    return envelope(result, service.store)


@router.get("/sales/{sale_id}/receipt", response_model=OperationEnvelope)
async def get_receipt(
    sale_id: str,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: SaleService = resolve_service(context, EntityKind.SALES.value, SaleService)
    result = await service.get_receipt(sale_id)
    return envelope(result, service.store)


@router.get("/conversations/{conversation_id}/messages", response_model=OperationEnvelope)
async def fetch_messages(
    conversation_id: str,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: ConversationService = resolve_service(
        context, EntityKind.CONVERSATIONS.value, ConversationService
    )
    result = await service.fetch_messages(conversation_id)
    return envelope(result, service.store)


@router.post("/conversations/{conversation_id}/messages", response_model=OperationEnvelope)
async def send_message(
    conversation_id: str,
    data: MessageCreate,
    context: AppContext = Depends(get_app_context),
) -> OperationEnvelope:
    service: ConversationService = resolve_service(
        context, EntityKind.CONVERSATIONS.value, ConversationService
    )
    result = await service.send_message(conversation_id, data.message)
    return envelope(result, service.store)
