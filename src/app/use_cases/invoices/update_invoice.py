"""UpdateInvoice Use Case

Edits invoice details and re-derives its amounts.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.use_cases.common import (
    inactive_client_error,
    load_owned_client,
    load_owned_invoice,
    paid_amount_error,
    refresh_invoice_totals,
)
from src.domain.calculations import round_money
from src.domain.invoice import InvoiceStatus
from .dtos import UpdateInvoiceCommandDTO, InvoiceResponseDTO

# Fields that define what is billed; frozen once the invoice leaves DRAFT
BILLING_FIELDS = (
    "client_id",
    "invoice_date",
    "due_date",
    "currency",
    "tax_rate",
    "subtotal_amount",
)
NOT_NULL_FIELDS = BILLING_FIELDS + ("paid_amount",)


class UpdateInvoice:
    """
    Use Case: Update an invoice

    Business Rules:
    1. Only fields present in the command are changed
    2. Billing fields can only change while the invoice is DRAFT
    3. A new client must belong to the user and be active
    4. due_date cannot precede invoice_date
    5. subtotal_amount is derived from line items when the invoice has any
    6. Amounts are re-derived; paid_amount cannot exceed total_amount

    Flow:
    1. Load invoice and check ownership
    2. Validate the changes
    3. Apply changes and re-derive totals
    4. Validate paid amount against the new total
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        client_repo: ClientRepository,
        line_item_repo: LineItemRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.client_repo = client_repo
        self.line_item_repo = line_item_repo

    async def execute(self, command: UpdateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            # Step 1: Load invoice
            loaded = await load_owned_invoice(self.invoice_repo, command.invoice_id, command.user_id)
            if loaded.is_err():
                return loaded
            invoice = loaded.value

            changes = {
                field: value
                for field, value in command.model_dump(
                    exclude_unset=True, exclude={"user_id", "invoice_id"}
                ).items()
                if not (value is None and field in NOT_NULL_FIELDS)
            }

            # Step 2: Validate
            billing_changes = [f for f in BILLING_FIELDS if f in changes]
            if billing_changes and invoice.status != InvoiceStatus.DRAFT:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_EDITABLE",
                        message=f"Invoice {invoice.invoice_number} is {invoice.status.value}; "
                                f"only DRAFT invoices can change {', '.join(billing_changes)}",
                    )
                )

            if "client_id" in changes and changes["client_id"] != invoice.client_id:
                client_result = await load_owned_client(
                    self.client_repo, changes["client_id"], command.user_id
                )
                if client_result.is_err():
                    return client_result
                client_error = inactive_client_error(client_result.value)
                if client_error:
                    return Return.err(client_error)

            invoice_date = changes.get("invoice_date", invoice.invoice_date)
            due_date = changes.get("due_date", invoice.due_date)
            if due_date < invoice_date:
                return Return.err(
                    Error(
                        code="INVALID_DUE_DATE",
                        message="Due date must not be before invoice date",
                        reason=f"invoice_date={invoice_date}, due_date={due_date}",
                    )
                )

            subtotal_override = changes.pop("subtotal_amount", None)
            if subtotal_override is not None:
                line_count = await self.line_item_repo.count_by_invoice_id(invoice.id)
                if line_count > 0:
                    return Return.err(
                        Error(
                            code="SUBTOTAL_DERIVED_FROM_LINE_ITEMS",
                            message="subtotal_amount is computed from line items and cannot be set",
                        )
                    )

            # Step 3: Apply changes and re-derive totals
            for field, value in changes.items():
                setattr(invoice, field, value)
            if "currency" in changes:
                invoice.currency = invoice.currency.upper()
            if "tax_rate" in changes:
                invoice.tax_rate = round_money(invoice.tax_rate)
            if "paid_amount" in changes:
                invoice.paid_amount = round_money(invoice.paid_amount)

            # Step 4: Paid amount
            updated = await refresh_invoice_totals(
                invoice, self.invoice_repo, self.line_item_repo, subtotal_override
            )
            error = paid_amount_error(updated)
            if error:
                await self.uow.rollback()
                return Return.err(error)

            # Step 5: Commit
            await self.uow.commit()

            return Return.ok(InvoiceResponseDTO.model_validate(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
