"""ListLineItems Use Case"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.use_cases.common import load_owned_invoice
from .dtos import InvoiceTotalsDTO, LineItemResponseDTO, ListLineItemsResponseDTO


class ListLineItems:
    """Use case: List the live line items of an invoice in line_order"""

    def __init__(self, invoice_repo: InvoiceRepository, line_item_repo: LineItemRepository):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo

    async def execute(self, user_id: str, invoice_id: str) -> Result[ListLineItemsResponseDTO]:
        loaded = await load_owned_invoice(self.invoice_repo, invoice_id, user_id, allow_deleted=True)
        if loaded.is_err():
            return loaded
        invoice = loaded.value

        line_items = await self.line_item_repo.get_by_invoice_id(invoice.id)

        return Return.ok(
            ListLineItemsResponseDTO(
                line_items=[LineItemResponseDTO.model_validate(item) for item in line_items],
                invoice_totals=InvoiceTotalsDTO.from_invoice(invoice),
            )
        )
