"""MarkOverdueInvoices Use Case

Moves open invoices past their due date to OVERDUE.
"""

import logging
from datetime import date
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_status_history_repository import InvoiceStatusHistoryRepository
from src.app.use_cases.common import apply_status_change
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_workflow import validate_transition
from .dtos import MarkOverdueResultDTO

logger = logging.getLogger(__name__)

OVERDUE_REASON = "Auto-marked as overdue (due date passed)"


class MarkOverdueInvoices:
    """
    Use Case: Automatic overdue detection

    Business Rules:
    1. Only live SENT or VIEWED invoices are considered
    2. An invoice is overdue when due_date < today
    3. Each marked invoice gets one history row with metadata {"automatic": true},
       attributed to the invoice owner
    4. All changes of a run are committed together

    Flow:
    1. Fetch overdue candidates
    2. Validate and apply the OVERDUE transition for each
    3. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        history_repo: InvoiceStatusHistoryRepository,
        batch_size: int = 500,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.history_repo = history_repo
        self.batch_size = batch_size

    async def execute(self, today: Optional[date] = None) -> Result[MarkOverdueResultDTO]:
        try:
            today = today or date.today()

            # Step 1: Candidates
            candidates = await self.invoice_repo.get_overdue_candidates(today, limit=self.batch_size)
            logger.info(f"Found {len(candidates)} overdue candidate invoices as of {today.isoformat()}")

            # Step 2: Apply transition
            marked_ids = []
            for invoice in candidates:
                violations = validate_transition(invoice, InvoiceStatus.OVERDUE, today=today)
                if violations:
                    logger.warning(
                        f"Skipping invoice {invoice.invoice_number}: {'; '.join(violations)}"
                    )
                    continue

                await apply_status_change(
                    invoice,
                    InvoiceStatus.OVERDUE,
                    user_id=invoice.user_id,
                    invoice_repo=self.invoice_repo,
                    history_repo=self.history_repo,
                    reason=OVERDUE_REASON,
                )
                marked_ids.append(invoice.id)

            # Step 3: Commit
            await self.uow.commit()

            if marked_ids:
                logger.info(f"Marked {len(marked_ids)} invoices as overdue")

            return Return.ok(
                MarkOverdueResultDTO(
                    checked=len(candidates),
                    marked=len(marked_ids),
                    invoice_ids=marked_ids,
                    run_date=today,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_OVERDUE_FAILED",
                    message="Failed to mark overdue invoices",
                    reason=str(e),
                )
            )
