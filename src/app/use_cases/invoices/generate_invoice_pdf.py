"""GenerateInvoicePdf Use Case

Renders an invoice as a PDF document.
"""

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.user_repository import UserRepository
from src.app.services.pdf_service import PdfService
from src.app.use_cases.common import load_owned_invoice
from .dtos import InvoicePdfDTO


class GenerateInvoicePdf:
    """
    Use Case: Generate invoice PDF

    Business Rules:
    1. Invoice must be live and belong to the user
    2. PDF shows issuer, client, live line items, totals and bank details

    Flow:
    1. Load invoice and check ownership
    2. Load client, issuer and line items
    3. Render PDF
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        client_repo: ClientRepository,
        user_repo: UserRepository,
        pdf_service: PdfService,
    ):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.client_repo = client_repo
        self.user_repo = user_repo
        self.pdf_service = pdf_service

    async def execute(self, user_id: str, invoice_id: str) -> Result[InvoicePdfDTO]:
        try:
            # Step 1: Load invoice
            loaded = await load_owned_invoice(self.invoice_repo, invoice_id, user_id)
            if loaded.is_err():
                return loaded
            invoice = loaded.value

            # Step 2: Related records
            client = await self.client_repo.get_by_id(invoice.client_id)
            if client is None:
                return Return.err(
                    Error(
                        code="CLIENT_NOT_FOUND",
                        message=f"Client {invoice.client_id} of invoice {invoice.invoice_number} not found",
                    )
                )
            user = await self.user_repo.get_by_id(invoice.user_id)
            if user is None:
                return Return.err(
                    Error(
                        code="USER_NOT_FOUND",
                        message=f"User {invoice.user_id} not found",
                    )
                )
            line_items = await self.line_item_repo.get_by_invoice_id(invoice.id)

            # Step 3: Render
            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                client=client,
                user=user,
                line_items=line_items,
            )

            return Return.ok(
                InvoicePdfDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    filename=f"{invoice.invoice_number}.pdf",
                    content=pdf_bytes,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GENERATE_PDF_FAILED",
                    message="Failed to generate invoice PDF",
                    reason=str(e),
                )
            )
