"""
Historical stock report endpoint.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from prostock.api.dependencies import get_history_use_case
from prostock.application.dto.responses import ErrorResponse, HistoryReportResponse
from prostock.application.use_cases import HistoryReportUseCase

router = APIRouter(prefix="/api/history", tags=["history"])


@router.get(
    "/{item_id}",
    response_model=HistoryReportResponse,
    responses={500: {"model": ErrorResponse, "description": "Report does not balance (strict)"}},
)
async def history_report(
    item_id: str,
    start_date: date = Query(...),
    end_date: date = Query(...),
    strict: bool = Query(default=False, description="Fail instead of flagging inconsistencies"),
    use_case: HistoryReportUseCase = Depends(get_history_use_case),
) -> HistoryReportResponse:
    """Movements in the range with the running balance around each one."""
    result = await use_case.execute(item_id, start_date, end_date, strict=strict)
    return HistoryReportResponse.from_report(result, start_date, end_date)
