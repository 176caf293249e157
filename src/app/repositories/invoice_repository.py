"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import date
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    get_by_id returns soft-deleted invoices; list queries exclude them.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_user_id(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve live invoices of a user, newest invoice_date first

        Args:
            user_id: Owning user
            status: Optional filter by status
            client_id: Optional filter by client
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def count_by_user_id(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[str] = None,
    ) -> int:
        """Count live invoices of a user matching the same filters as get_by_user_id"""
        pass

    @abstractmethod
    async def get_by_invoice_number(self, user_id: str, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve a live invoice by number

        Args:
            user_id: Owning user
            invoice_number: Invoice number

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_overdue_candidates(self, today: date, limit: int = 500) -> List[Invoice]:
        """
        Retrieve live SENT/VIEWED invoices whose due_date is before today

        Args:
            today: Reference date
            limit: Maximum number of invoices to return

        Returns:
            List of invoices
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def next_invoice_sequence(self, user_id: str) -> int:
        """
        Next per-user invoice sequence

        Returns:
            Highest invoice_sequence of the user + 1 (1 for the first invoice)
        """
        pass
