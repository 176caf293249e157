"""Line item use cases"""
from .add_line_item import AddLineItem
from .list_line_items import ListLineItems
from .get_line_item import GetLineItem
from .update_line_item import UpdateLineItem
from .delete_line_item import DeleteLineItem
from .dtos import (
    AddLineItemCommandDTO,
    UpdateLineItemCommandDTO,
    LineItemResponseDTO,
    InvoiceTotalsDTO,
    LineItemMutationResponseDTO,
    ListLineItemsResponseDTO,
)

__all__ = [
    "AddLineItem",
    "ListLineItems",
    "GetLineItem",
    "UpdateLineItem",
    "DeleteLineItem",
    "AddLineItemCommandDTO",
    "UpdateLineItemCommandDTO",
    "LineItemResponseDTO",
    "InvoiceTotalsDTO",
    "LineItemMutationResponseDTO",
    "ListLineItemsResponseDTO",
]
