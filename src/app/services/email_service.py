"""Email Service Interface

Defines the contract for delivering invoices by e-mail.
"""

from abc import ABC, abstractmethod
from src.domain.invoice import Invoice
from src.domain.user import User


class EmailService(ABC):
    """
    Abstract e-mail delivery service

    Implementations can deliver via:
    - Log output (development)
    - HTTP e-mail API (webhook)
    """

    @abstractmethod
    async def send_invoice(
        self,
        recipient_email: str,
        invoice: Invoice,
        sender: User,
        pdf_bytes: bytes,
    ) -> bool:
        """
        Send an invoice PDF to a recipient

        Args:
            recipient_email: Destination address
            invoice: Invoice being sent (number used for subject/filename)
            sender: Issuing user (reply-to and display name)
            pdf_bytes: Rendered PDF attachment

        Returns:
            True if the e-mail was accepted for delivery, False otherwise
        """
        pass
