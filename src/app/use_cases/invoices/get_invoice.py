"""GetInvoice Use Case

Returns an invoice with its live line items, client summary and the
statuses it can move to.
"""

from libs.result import Result, Return
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.use_cases.common import load_owned_invoice
from src.domain.invoice_workflow import get_allowed_next_statuses
from .dtos import (
    InvoiceClientDTO,
    InvoiceDetailResponseDTO,
    InvoiceLineItemDTO,
    InvoiceResponseDTO,
)


class GetInvoice:
    """
    Use Case: View an invoice

    Soft-deleted invoices remain retrievable by id; they report no allowed
    transitions.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        client_repo: ClientRepository,
    ):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.client_repo = client_repo

    async def execute(self, user_id: str, invoice_id: str) -> Result[InvoiceDetailResponseDTO]:
        loaded = await load_owned_invoice(self.invoice_repo, invoice_id, user_id, allow_deleted=True)
        if loaded.is_err():
            return loaded
        invoice = loaded.value

        line_items = await self.line_item_repo.get_by_invoice_id(invoice.id)
        client = await self.client_repo.get_by_id(invoice.client_id)

        allowed = [] if invoice.is_deleted else get_allowed_next_statuses(invoice.status)

        base = InvoiceResponseDTO.model_validate(invoice)
        return Return.ok(
            InvoiceDetailResponseDTO(
                **base.model_dump(),
                client=InvoiceClientDTO.model_validate(client) if client else None,
                line_items=[InvoiceLineItemDTO.model_validate(item) for item in line_items],
                allowed_transitions=allowed,
            )
        )
