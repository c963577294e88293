"""Pydantic DTOs exposing store selectors and operation outcomes to UI observers."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from flowtap.domain.entities import NotificationLevel

from .envelope import PaginationSchema


class StoreStateResponse(BaseModel):
    """Full selector snapshot of one entity store."""

    kind: str
    collection: list[Any] = Field(default_factory=list)
    selected: Any | None = None
    request_phase: str
    is_loading: bool
    error: str | None = None
    message: str | None = None
    pagination: PaginationSchema
    documents: dict[str, Any] = Field(default_factory=dict)
    children: dict[str, list[Any]] = Field(default_factory=dict)
    in_flight: int = 0


class StoreSummaryResponse(BaseModel):
    """Compact per-store status for dashboards."""

    kind: str
    request_phase: str
    is_loading: bool
    size: int


class OperationResultResponse(BaseModel):
    """Outcome of one lifecycle-driven operation."""

    operation: str
    token: int
    phase: str
    applied: bool
    data: Any = None
    message: str | None = None
    error: str | None = None


class OperationEnvelope(BaseModel):
    """Operation outcome together with the store state after it settled."""

    result: OperationResultResponse
    state: StoreStateResponse


class NotificationSchema(BaseModel):
    """Wire shape of a one-shot notification (SSE payload)."""

    id: str
    store: str
    level: NotificationLevel
    title: str
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}
