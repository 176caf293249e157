"""Background workers for invoicing service"""
from .overdue_marker import OverdueInvoiceWorker

__all__ = ["OverdueInvoiceWorker"]
