"""UpdateLineItem Use Case

Edits a line item of a draft invoice and updates the invoice totals.
"""

from datetime import datetime
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
from src.domain.calculations import calculate_line_amounts, round_money
from src.domain.invoice import InvoiceStatus
from .dtos import (
    InvoiceTotalsDTO,
    LineItemMutationResponseDTO,
    LineItemResponseDTO,
    UpdateLineItemCommandDTO,
)


class UpdateLineItem:
    """
    Use Case: Update line item

    Business Rules:
    1. Invoice must be live, owned by the user and DRAFT
    2. Line item must be live and belong to the invoice
    3. Line amounts and invoice aggregates are recomputed
    4. The new total must stay at or above paid_amount

    Flow:
    1. Load invoice and line item
    2. Apply changes
    3. Recompute line amounts
    4. Recompute invoice totals
    5. Commit transaction
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

    async def execute(self, command: UpdateLineItemCommandDTO) -> Result[LineItemMutationResponseDTO]:
        try:
            # Step 1: Load invoice and line item
            loaded = await load_owned_invoice(self.invoice_repo, command.invoice_id, command.user_id)
            if loaded.is_err():
                return loaded
            invoice = loaded.value

            if invoice.status != InvoiceStatus.DRAFT:
                return Return.err(invoice_not_editable_error(invoice))

            line_item = await self.line_item_repo.get_by_id(command.line_item_id)
            if line_item is None or line_item.invoice_id != invoice.id or line_item.is_deleted:
                return Return.err(
                    Error(
                        code="LINE_ITEM_NOT_FOUND",
                        message=f"Line item {command.line_item_id} not found on invoice {invoice.id}",
                    )
                )

            # Step 2: Apply changes
            changes = command.model_dump(
                exclude_unset=True, exclude={"user_id", "invoice_id", "line_item_id"}
            )
            for field, value in changes.items():
                if value is None:
                    continue
                setattr(line_item, field, value)

            # Step 3: Line amounts
            line_item.quantity = round_money(line_item.quantity)
            line_item.unit_price = round_money(line_item.unit_price)
            line_item.tax_rate = round_money(line_item.tax_rate)
            amounts = calculate_line_amounts(
                line_item.quantity, line_item.unit_price, line_item.tax_rate, line_item.tax_included
            )
            line_item.amount = amounts.amount
            line_item.tax_amount = amounts.tax_amount
            line_item.total = amounts.total
            line_item.updated_at = datetime.utcnow()

            updated = await self.line_item_repo.update(line_item)

            # Step 4: Invoice totals
            invoice = await refresh_invoice_totals(invoice, self.invoice_repo, self.line_item_repo)
            error = paid_amount_error(invoice)
            if error:
                await self.uow.rollback()
                return Return.err(error)

            # Step 5: Commit
            await self.uow.commit()

            return Return.ok(
                LineItemMutationResponseDTO(
                    line_item=LineItemResponseDTO.model_validate(updated),
                    invoice_totals=InvoiceTotalsDTO.from_invoice(invoice),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_LINE_ITEM_FAILED",
                    message="Failed to update line item",
                    reason=str(e),
                )
            )
