"""GetLineItem Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.use_cases.common import load_owned_invoice
from .dtos import LineItemResponseDTO


class GetLineItem:
    """
    Use case: View one line item

    Soft-deleted line items remain retrievable by id.
    """

    def __init__(self, invoice_repo: InvoiceRepository, line_item_repo: LineItemRepository):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo

    async def execute(
        self, user_id: str, invoice_id: str, line_item_id: str
    ) -> Result[LineItemResponseDTO]:
        loaded = await load_owned_invoice(self.invoice_repo, invoice_id, user_id, allow_deleted=True)
        if loaded.is_err():
            return loaded

        line_item = await self.line_item_repo.get_by_id(line_item_id)
        if line_item is None or line_item.invoice_id != invoice_id:
            return Return.err(
                Error(
                    code="LINE_ITEM_NOT_FOUND",
                    message=f"Line item {line_item_id} not found on invoice {invoice_id}",
                )
            )

        return Return.ok(LineItemResponseDTO.model_validate(line_item))
