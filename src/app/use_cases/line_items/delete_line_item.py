"""DeleteLineItem Use Case

Soft deletes a line item of a draft invoice and updates the invoice totals.
"""

from datetime import datetime
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.use_cases.common import (
    invoice_not_editable_error,
    load_owned_invoice,
    paid_amount_error,
    refresh_invoice_totals,
)
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceTotalsDTO, LineItemMutationResponseDTO, LineItemResponseDTO


class DeleteLineItem:
    """
    Use Case: Delete line item

    Sets deleted_at; the row no longer counts towards invoice totals.
    Rejected with PAID_AMOUNT_EXCEEDS_TOTAL when the reduced total would
    fall below paid_amount.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo

    async def execute(
        self, user_id: str, invoice_id: str, line_item_id: str
    ) -> Result[LineItemMutationResponseDTO]:
        try:
            loaded = await load_owned_invoice(self.invoice_repo, invoice_id, user_id)
            if loaded.is_err():
                return loaded
            invoice = loaded.value

            if invoice.status != InvoiceStatus.DRAFT:
                return Return.err(invoice_not_editable_error(invoice))

            line_item = await self.line_item_repo.get_by_id(line_item_id)
            if line_item is None or line_item.invoice_id != invoice.id or line_item.is_deleted:
                return Return.err(
                    Error(
                        code="LINE_ITEM_NOT_FOUND",
                        message=f"Line item {line_item_id} not found on invoice {invoice_id}",
                    )
                )

            now = datetime.utcnow()
            line_item.deleted_at = now
            line_item.updated_at = now
            deleted = await self.line_item_repo.update(line_item)

            # Without remaining lines the invoice falls back to an empty subtotal
            invoice = await refresh_invoice_totals(
                invoice, self.invoice_repo, self.line_item_repo, subtotal_override=Decimal("0")
            )
            error = paid_amount_error(invoice)
            if error:
                await self.uow.rollback()
                return Return.err(error)

            await self.uow.commit()

            return Return.ok(
                LineItemMutationResponseDTO(
                    line_item=LineItemResponseDTO.model_validate(deleted),
                    invoice_totals=InvoiceTotalsDTO.from_invoice(invoice),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_LINE_ITEM_FAILED",
                    message="Failed to delete line item",
                    reason=str(e),
                )
            )
