"""E-mail Service Implementations

Provides concrete implementations for delivering invoices.
"""

import base64
import logging
from typing import Optional
import httpx
from src.app.services.email_service import EmailService
from src.domain.invoice import Invoice
from src.domain.user import User

logger = logging.getLogger(__name__)


def invoice_subject(invoice: Invoice) -> str:
    return f"Invoice {invoice.invoice_number}"


class LoggingEmailService(EmailService):
    """
    E-mail service that only logs deliveries

    Useful for development and testing, or when no e-mail API is configured.
    """

    async def send_invoice(
        self,
        recipient_email: str,
        invoice: Invoice,
        sender: User,
        pdf_bytes: bytes,
    ) -> bool:
        logger.info(
            f"[EMAIL] To: {recipient_email}, "
            f"Subject: {invoice_subject(invoice)}, "
            f"From: {sender.email}, "
            f"Attachment: {invoice.invoice_number}.pdf ({len(pdf_bytes)} bytes)"
        )
        return True


class WebhookEmailService(EmailService):
    """
    E-mail service that posts messages to an HTTP e-mail API

    Sends a JSON payload with the PDF attached as base64.
    """

    def __init__(self, api_url: str, from_address: str, timeout: float = 10.0):
        """
        Initialize webhook e-mail service

        Args:
            api_url: URL to POST messages to
            from_address: Envelope sender address
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.from_address = from_address
        self.timeout = timeout

    def build_payload(
        self,
        recipient_email: str,
        invoice: Invoice,
        sender: User,
        pdf_bytes: bytes,
    ) -> dict:
        display_name = sender.company_name or sender.full_name
        return {
            "from": {"email": self.from_address, "name": display_name},
            "reply_to": sender.email,
            "to": [recipient_email],
            "subject": invoice_subject(invoice),
            "text": (
                f"Please find attached invoice {invoice.invoice_number} "
                f"for {invoice.total_amount:.2f} {invoice.currency}, "
                f"due on {invoice.due_date.isoformat()}."
            ),
            "attachments": [
                {
                    "filename": f"{invoice.invoice_number}.pdf",
                    "content_type": "application/pdf",
                    "content": base64.b64encode(pdf_bytes).decode("ascii"),
                }
            ],
        }

    async def send_invoice(
        self,
        recipient_email: str,
        invoice: Invoice,
        sender: User,
        pdf_bytes: bytes,
    ) -> bool:
        """
        Send invoice via the e-mail API

        Returns:
            True if the API accepted the message, False otherwise
        """
        payload = self.build_payload(recipient_email, invoice, sender, pdf_bytes)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                logger.info(
                    f"Invoice {invoice.invoice_number} e-mailed to {recipient_email} via {self.api_url}"
                )
                return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to e-mail invoice {invoice.invoice_number}: {e}")
            return False


class CompositeEmailService(EmailService):
    """
    E-mail service that delegates to multiple services

    Delivery succeeds only when every delegate succeeds.
    """

    def __init__(self, services: list[EmailService]):
        self.services = services

    async def send_invoice(
        self,
        recipient_email: str,
        invoice: Invoice,
        sender: User,
        pdf_bytes: bytes,
    ) -> bool:
        success = True
        for service in self.services:
            if not await service.send_invoice(recipient_email, invoice, sender, pdf_bytes):
                logger.error(f"E-mail service {type(service).__name__} failed for {invoice.invoice_number}")
                success = False
        return success


def create_email_service(
    api_url: Optional[str] = None,
    timeout: float = 10.0,
    from_address: str = "invoices@localhost",
) -> EmailService:
    """
    Factory function to create appropriate e-mail service

    Args:
        api_url: Optional e-mail API URL. If provided, creates composite
                 service with logging + webhook. Otherwise, just logging.
        timeout: Request timeout for the e-mail API
        from_address: Envelope sender address

    Returns:
        Configured EmailService
    """
    services: list[EmailService] = [LoggingEmailService()]

    if api_url:
        services.append(WebhookEmailService(api_url, from_address, timeout=timeout))

    if len(services) == 1:
        return services[0]

    return CompositeEmailService(services)
