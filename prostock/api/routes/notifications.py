"""
Notification feed endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from prostock.api.dependencies import get_context
from prostock.application import AppContext
from prostock.application.dto.responses import NotificationResponse

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    limit: int | None = Query(default=None, ge=1),
    ctx: AppContext = Depends(get_context),
) -> list[NotificationResponse]:
    """Recent toasts, newest first."""
    return [NotificationResponse.from_entity(n) for n in ctx.notifier.recent(limit)]


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_notifications(ctx: AppContext = Depends(get_context)) -> None:
    ctx.notifier.clear()
