"""AddLineItem Use Case

Adds a billable row to a draft invoice and updates the invoice totals.
"""

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
from src.domain.line_item import LineItem
from .dtos import (
    AddLineItemCommandDTO,
    InvoiceTotalsDTO,
    LineItemMutationResponseDTO,
    LineItemResponseDTO,
)


class AddLineItem:
    """
    Use Case: Add line item

    Business Rules:
    1. Invoice must be live, owned by the user and DRAFT
    2. amount = quantity * unit_price; tax is added unless tax_included
    3. line_order defaults to the highest live order + 1
    4. Invoice aggregates are recomputed in the same transaction
    5. The new total must stay at or above paid_amount

    Flow:
    1. Load invoice and check it is editable
    2. Compute line amounts
    3. Create line item
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

    async def execute(self, command: AddLineItemCommandDTO) -> Result[LineItemMutationResponseDTO]:
        try:
            # Step 1: Load invoice
            loaded = await load_owned_invoice(self.invoice_repo, command.invoice_id, command.user_id)
            if loaded.is_err():
                return loaded
            invoice = loaded.value

            if invoice.status != InvoiceStatus.DRAFT:
                return Return.err(invoice_not_editable_error(invoice))

            # Step 2: Amounts
            quantity = round_money(command.quantity)
            unit_price = round_money(command.unit_price)
            tax_rate = round_money(command.tax_rate if command.tax_rate is not None else invoice.tax_rate)
            amounts = calculate_line_amounts(quantity, unit_price, tax_rate, command.tax_included)

            # Step 3: Create line item
            if command.line_order is not None:
                line_order = command.line_order
            else:
                line_order = await self.line_item_repo.next_line_order(invoice.id)

            line_item = LineItem(
                invoice_id=invoice.id,
                description=command.description,
                quantity=quantity,
                unit_price=unit_price,
                tax_rate=tax_rate,
                tax_included=command.tax_included,
                amount=amounts.amount,
                tax_amount=amounts.tax_amount,
                total=amounts.total,
                line_order=line_order,
            )
            created = await self.line_item_repo.create(line_item)

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
                    line_item=LineItemResponseDTO.model_validate(created),
                    invoice_totals=InvoiceTotalsDTO.from_invoice(invoice),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ADD_LINE_ITEM_FAILED",
                    message="Failed to add line item",
                    reason=str(e),
                )
            )
