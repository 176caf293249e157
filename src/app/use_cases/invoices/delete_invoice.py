"""DeleteInvoice Use Case

Soft deletes an invoice.
"""

from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.common import load_owned_invoice
from .dtos import InvoiceResponseDTO


class DeleteInvoice:
    """
    Use Case: Delete an invoice

    Sets deleted_at only. The invoice disappears from lists but stays
    retrievable by id together with its status history.
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, user_id: str, invoice_id: str) -> Result[InvoiceResponseDTO]:
        try:
            loaded = await load_owned_invoice(self.invoice_repo, invoice_id, user_id)
            if loaded.is_err():
                return loaded
            invoice = loaded.value

            now = datetime.utcnow()
            invoice.deleted_at = now
            invoice.updated_at = now

            deleted = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            return Return.ok(InvoiceResponseDTO.model_validate(deleted))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
