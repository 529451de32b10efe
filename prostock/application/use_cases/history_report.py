"""Historical stock report use case."""

from datetime import date

from prostock.application.context import AppContext
from prostock.config import get_logger
from prostock.core.exceptions import MissingFieldError, ValidationError
from prostock.core.services import ReconstructedReport, reconstruct_report

logger = get_logger(__name__)


class HistoryReportUseCase:
    """Fetch one item's movements for a range and replay the balances."""

    def __init__(self, context: AppContext):
        self._ctx = context

    async def execute(
        self,
        item_id: str,
        start_date: date,
        end_date: date,
        strict: bool = False,
    ) -> ReconstructedReport:
        self._ctx.require_user()
        if not item_id.strip():
            raise MissingFieldError("item_id")
        if start_date > end_date:
            raise ValidationError("start_date", "Start date must not be after end date", start_date)

        logger.info(
            "history_report_started",
            item_id=item_id,
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
        )
        report = await self._ctx.backend.get_history_report(item_id, start_date, end_date)
        return reconstruct_report(report, strict=strict)
