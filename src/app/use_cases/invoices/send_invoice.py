"""SendInvoice Use Case

E-mails the invoice PDF to the client and marks a draft invoice as sent.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.services.email_service import EmailService
from src.app.services.pdf_service import PdfService
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_status_history_repository import InvoiceStatusHistoryRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases.common import apply_status_change, load_owned_invoice
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_workflow import validate_transition
from .dtos import SendInvoiceCommandDTO, SendInvoiceResponseDTO

logger = logging.getLogger(__name__)

# Statuses that can be (re)sent without a status change
RESENDABLE_STATUSES = (
    InvoiceStatus.SENT,
    InvoiceStatus.VIEWED,
    InvoiceStatus.OVERDUE,
    InvoiceStatus.PAID,
)


class SendInvoice:
    """
    Use Case: Send invoice by e-mail

    Business Rules:
    1. Recipient defaults to the client's e-mail
    2. A DRAFT invoice must pass the DRAFT -> SENT checks (line items) and
       is moved to SENT with one history row
    3. SENT, VIEWED, OVERDUE and PAID invoices are re-sent unchanged
    4. CANCELLED and REFUNDED invoices cannot be sent
    5. Nothing is committed when delivery fails
    6. The attached PDF shows the status after sending

    Flow:
    1. Load invoice and check ownership
    2. Check sendability
    3. Load client, issuer and line items
    4. Apply DRAFT -> SENT (not committed), then render the PDF
    5. Deliver e-mail; roll back on failure
    6. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        client_repo: ClientRepository,
        user_repo: UserRepository,
        history_repo: InvoiceStatusHistoryRepository,
        pdf_service: PdfService,
        email_service: EmailService,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.client_repo = client_repo
        self.user_repo = user_repo
        self.history_repo = history_repo
        self.pdf_service = pdf_service
        self.email_service = email_service

    async def execute(self, command: SendInvoiceCommandDTO) -> Result[SendInvoiceResponseDTO]:
        try:
            # Step 1: Load invoice
            loaded = await load_owned_invoice(self.invoice_repo, command.invoice_id, command.user_id)
            if loaded.is_err():
                return loaded
            invoice = loaded.value

            # Step 2: Sendability
            line_items = await self.line_item_repo.get_by_invoice_id(invoice.id)
            if invoice.status == InvoiceStatus.DRAFT:
                violations = validate_transition(
                    invoice, InvoiceStatus.SENT, line_item_count=len(line_items), today=date.today()
                )
                if violations:
                    return Return.err(
                        Error(
                            code="INVALID_STATUS_TRANSITION",
                            message="; ".join(violations),
                            reason=f"{invoice.status.value} -> {InvoiceStatus.SENT.value}",
                        )
                    )
            elif invoice.status not in RESENDABLE_STATUSES:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_SENDABLE",
                        message=f"Invoice {invoice.invoice_number} is {invoice.status.value} "
                                f"and cannot be sent",
                    )
                )

            # Step 3: Client and issuer
            client = await self.client_repo.get_by_id(invoice.client_id)
            user = await self.user_repo.get_by_id(invoice.user_id)
            if client is None or user is None:
                return Return.err(
                    Error(
                        code="CLIENT_NOT_FOUND" if client is None else "USER_NOT_FOUND",
                        message=f"Cannot send invoice {invoice.invoice_number}: missing "
                                f"{'client' if client is None else 'issuer'}",
                    )
                )

            recipient = (command.recipient_email or client.email).lower()

            # Step 4: DRAFT -> SENT, applied before rendering
            if invoice.status == InvoiceStatus.DRAFT:
                invoice = await apply_status_change(
                    invoice,
                    InvoiceStatus.SENT,
                    user_id=command.user_id,
                    invoice_repo=self.invoice_repo,
                    history_repo=self.history_repo,
                    reason=f"Sent by e-mail to {recipient}",
                    metadata={"recipient_email": recipient},
                )

            pdf_bytes = self.pdf_service.generate_invoice(
                invoice=invoice,
                client=client,
                user=user,
                line_items=line_items,
            )

            # Step 5: Deliver
            delivered = await self.email_service.send_invoice(
                recipient_email=recipient,
                invoice=invoice,
                sender=user,
                pdf_bytes=pdf_bytes,
            )
            if not delivered:
                error = Error(
                    code="EMAIL_DELIVERY_FAILED",
                    message=f"Failed to deliver invoice {invoice.invoice_number} to {recipient}",
                    reason="E-mail service rejected the message",
                )
                await self.uow.rollback()
                return Return.err(error)

            response = SendInvoiceResponseDTO(
                invoice_id=invoice.id,
                invoice_number=invoice.invoice_number,
                recipient_email=recipient,
                status=invoice.status,
                sent_at=invoice.sent_at,
                pdf_size=len(pdf_bytes),
                message=f"Invoice {invoice.invoice_number} sent to {recipient}",
            )

            # Step 6: Commit
            await self.uow.commit()

            logger.info(response.message)
            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SEND_INVOICE_FAILED",
                    message="Failed to send invoice",
                    reason=str(e),
                )
            )
