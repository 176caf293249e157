"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.line_item import LineItem
from src.domain.user import User


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides PDF generation capabilities for invoices.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        client: Client,
        user: User,
        line_items: List[LineItem],
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice entity with amounts and dates
            client: Billed client (Bill To block)
            user: Issuing user (company header, bank details in footer)
            line_items: Live line items in line_order

        Returns:
            PDF document as bytes
        """
        pass
