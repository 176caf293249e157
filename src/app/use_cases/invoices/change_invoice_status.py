"""ChangeInvoiceStatus Use Case

Moves an invoice along its lifecycle and records the change.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_status_history_repository import InvoiceStatusHistoryRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.use_cases.common import apply_status_change, load_owned_invoice
from src.domain.invoice_workflow import validate_transition
from .dtos import ChangeInvoiceStatusCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class ChangeInvoiceStatus:
    """
    Use Case: Change invoice status

    Business Rules:
    1. Transition must be allowed by the workflow table
    2. DRAFT -> SENT requires at least one live line item
    3. -> OVERDUE requires the due date to have passed
    4. Exactly one history row is written per change, in the same transaction

    Flow:
    1. Load invoice and check ownership
    2. Validate transition
    3. Update invoice and append history
    4. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        history_repo: InvoiceStatusHistoryRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.history_repo = history_repo

    async def execute(self, command: ChangeInvoiceStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            # Step 1: Load invoice
            loaded = await load_owned_invoice(self.invoice_repo, command.invoice_id, command.user_id)
            if loaded.is_err():
                return loaded
            invoice = loaded.value
            from_status = invoice.status

            # Step 2: Validate transition
            line_item_count = await self.line_item_repo.count_by_invoice_id(invoice.id)
            violations = validate_transition(
                invoice, command.status, line_item_count=line_item_count, today=date.today()
            )
            if violations:
                return Return.err(
                    Error(
                        code="INVALID_STATUS_TRANSITION",
                        message="; ".join(violations),
                        reason=f"{from_status.value} -> {command.status.value}",
                    )
                )

            # Step 3: Update and record
            updated = await apply_status_change(
                invoice,
                command.status,
                user_id=command.user_id,
                invoice_repo=self.invoice_repo,
                history_repo=self.history_repo,
                reason=command.reason,
                metadata=command.metadata,
            )

            # Step 4: Commit
            await self.uow.commit()

            logger.info(
                f"Invoice {updated.invoice_number} status {from_status.value} -> {updated.status.value}"
            )
            return Return.ok(InvoiceResponseDTO.model_validate(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CHANGE_INVOICE_STATUS_FAILED",
                    message="Failed to change invoice status",
                    reason=str(e),
                )
            )
