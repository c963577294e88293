"""Notification stream — server-sent events carrying one-shot store notifications."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from flowtap.application.services import AppContext
from flowtap.infrastructure.dependencies import get_app_context

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("/stream")
async def notification_stream(
    context: AppContext = Depends(get_app_context),
) -> StreamingResponse:
    """One ``notification`` event per success or error transition of any store."""
    if context.broadcaster is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Notification stream is not configured",
        )
    return StreamingResponse(
        context.broadcaster.subscribe(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
