"""Line Item Repository Interface

Defines the contract for line item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.line_item import LineItem


class LineItemRepository(ABC):
    """Repository interface for LineItem persistence"""

    @abstractmethod
    async def create(self, line_item: LineItem) -> LineItem:
        """
        Create a new line item

        Args:
            line_item: LineItem entity to persist

        Returns:
            Created LineItem
        """
        pass

    @abstractmethod
    async def get_by_id(self, line_item_id: str) -> Optional[LineItem]:
        """
        Retrieve line item by ID, including soft-deleted items

        Args:
            line_item_id: LineItem ID

        Returns:
            LineItem if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[LineItem]:
        """
        Retrieve live line items of an invoice ordered by line_order

        Args:
            invoice_id: Invoice ID

        Returns:
            List of line items
        """
        pass

    @abstractmethod
    async def count_by_invoice_id(self, invoice_id: str) -> int:
        """Count live line items of an invoice"""
        pass

    @abstractmethod
    async def next_line_order(self, invoice_id: str) -> int:
        """
        Next line_order for an invoice

        Returns:
            Highest live line_order + 1 (0 for the first line)
        """
        pass

    @abstractmethod
    async def update(self, line_item: LineItem) -> LineItem:
        """
        Update an existing line item

        Args:
            line_item: LineItem entity with updated values

        Returns:
            Updated LineItem
        """
        pass
