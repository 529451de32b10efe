"""
Excel export endpoint.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from prostock.api.dependencies import get_export_use_case
from prostock.application.dto.requests import ExportRequest
from prostock.application.dto.responses import ErrorResponse
from prostock.application.use_cases import XLSX_MEDIA_TYPE, ExportTransactionsUseCase

router = APIRouter(prefix="/api/export", tags=["export"])


@router.post(
    "",
    response_class=Response,
    responses={
        200: {"content": {XLSX_MEDIA_TYPE: {}}, "description": "The workbook"},
        400: {"model": ErrorResponse, "description": "Bad range or nothing matched"},
    },
)
async def export_transactions(
    request: ExportRequest,
    use_case: ExportTransactionsUseCase = Depends(get_export_use_case),
) -> Response:
    """Filtered ledger as an .xlsx download."""
    result = await use_case.execute(request)
    return Response(
        content=result.content,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Row-Count": str(result.row_count),
        },
    )
