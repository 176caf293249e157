"""Invoice Status History Repository Interface

History is append-only: there is no update or delete.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_status_history import InvoiceStatusHistory


class InvoiceStatusHistoryRepository(ABC):
    """Repository interface for InvoiceStatusHistory persistence"""

    @abstractmethod
    async def create(self, entry: InvoiceStatusHistory) -> InvoiceStatusHistory:
        """
        Append a history entry

        Args:
            entry: InvoiceStatusHistory to persist

        Returns:
            Created entry
        """
        pass

    @abstractmethod
    async def get_by_invoice_id(
        self,
        invoice_id: str,
        limit: int = 50,
        offset: int = 0,
    ) -> List[InvoiceStatusHistory]:
        """
        Retrieve history of an invoice, newest first

        Args:
            invoice_id: Invoice ID
            limit: Maximum number of entries to return
            offset: Offset for pagination

        Returns:
            List of history entries
        """
        pass

    @abstractmethod
    async def count_by_invoice_id(self, invoice_id: str) -> int:
        """Count history entries of an invoice"""
        pass
