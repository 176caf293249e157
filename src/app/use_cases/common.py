"""Helpers shared by invoice and line item use cases"""

from datetime import datetime
from typing import Any, Dict, Optional
from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_status_history_repository import InvoiceStatusHistoryRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.calculations import calculate_invoice_totals, calculate_tax, round_money
from src.domain.client import Client, ClientStatus
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_status_history import InvoiceStatusHistory
from src.domain.invoice_workflow import get_transition_description, is_automatic_transition


async def load_owned_invoice(
    invoice_repo: InvoiceRepository,
    invoice_id: str,
    user_id: str,
    allow_deleted: bool = False,
) -> Result[Invoice]:
    """
    Load an invoice and check it belongs to the user

    Returns INVOICE_NOT_FOUND when missing (or soft-deleted unless
    allow_deleted) and FORBIDDEN when owned by another user.
    """
    invoice = await invoice_repo.get_by_id(invoice_id)

    if invoice is None or (invoice.is_deleted and not allow_deleted):
        return Return.err(
            Error(
                code="INVOICE_NOT_FOUND",
                message=f"Invoice {invoice_id} not found",
            )
        )

    if invoice.user_id != user_id:
        return Return.err(
            Error(
                code="FORBIDDEN",
                message="You do not have access to this invoice",
                reason=f"Invoice {invoice_id} belongs to another user",
            )
        )

    return Return.ok(invoice)


async def load_owned_client(
    client_repo: ClientRepository,
    client_id: str,
    user_id: str,
    allow_deleted: bool = False,
) -> Result[Client]:
    """Client counterpart of load_owned_invoice (CLIENT_NOT_FOUND / FORBIDDEN)"""
    client = await client_repo.get_by_id(client_id)

    if client is None or (client.is_deleted and not allow_deleted):
        return Return.err(
            Error(
                code="CLIENT_NOT_FOUND",
                message=f"Client {client_id} not found",
            )
        )

    if client.user_id != user_id:
        return Return.err(
            Error(
                code="FORBIDDEN",
                message="You do not have access to this client",
                reason=f"Client {client_id} belongs to another user",
            )
        )

    return Return.ok(client)


def invoice_not_editable_error(invoice: Invoice) -> Error:
    return Error(
        code="INVOICE_NOT_EDITABLE",
        message=f"Invoice {invoice.invoice_number} cannot be edited "
                f"while it is {invoice.status.value}",
        reason="Only DRAFT invoices can be edited",
    )


def inactive_client_error(client: Client) -> Optional[Error]:
    """INVALID_CLIENT_STATUS unless the client can be invoiced"""
    if client.status == ClientStatus.ACTIVE:
        return None
    return Error(
        code="INVALID_CLIENT_STATUS",
        message=f"Client {client.name} is {client.status.value} and cannot be invoiced",
        reason="Only active clients can be invoiced",
    )


def paid_amount_error(invoice: Invoice) -> Optional[Error]:
    """PAID_AMOUNT_EXCEEDS_TOTAL when paid_amount is above total_amount"""
    if invoice.paid_amount <= invoice.total_amount:
        return None
    return Error(
        code="PAID_AMOUNT_EXCEEDS_TOTAL",
        message=f"Paid amount {invoice.paid_amount} exceeds invoice total "
                f"{invoice.total_amount}",
    )


async def refresh_invoice_totals(
    invoice: Invoice,
    invoice_repo: InvoiceRepository,
    line_item_repo: LineItemRepository,
    subtotal_override: Optional[object] = None,
) -> Invoice:
    """
    Re-derive invoice aggregates and persist them

    With live line items the aggregates are the sums of the lines.
    Without line items the subtotal is kept (or replaced by
    subtotal_override) and tax is computed from the invoice tax_rate.
    """
    line_items = await line_item_repo.get_by_invoice_id(invoice.id)

    if line_items:
        totals = calculate_invoice_totals(line_items)
        invoice.subtotal_amount = totals.subtotal_amount
        invoice.tax_amount = totals.tax_amount
        invoice.total_amount = totals.total_amount
    else:
        if subtotal_override is not None:
            invoice.subtotal_amount = round_money(subtotal_override)
        invoice.subtotal_amount = round_money(invoice.subtotal_amount)
        invoice.tax_amount = calculate_tax(invoice.subtotal_amount, invoice.tax_rate)
        invoice.total_amount = invoice.subtotal_amount + invoice.tax_amount

    invoice.updated_at = datetime.utcnow()
    return await invoice_repo.update(invoice)


async def apply_status_change(
    invoice: Invoice,
    new_status: InvoiceStatus,
    user_id: str,
    invoice_repo: InvoiceRepository,
    history_repo: InvoiceStatusHistoryRepository,
    reason: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Invoice:
    """
    Move an invoice to new_status and append exactly one history row

    The transition must already be validated. Sets sent_at, viewed_at or
    paid_date/paid_amount as the target status requires. Does not commit.
    """
    now = datetime.utcnow()
    from_status = invoice.status

    invoice.status = new_status
    invoice.updated_at = now

    if new_status == InvoiceStatus.SENT:
        invoice.sent_at = now
    elif new_status == InvoiceStatus.VIEWED:
        invoice.viewed_at = now
    elif new_status == InvoiceStatus.PAID:
        invoice.paid_date = now.date()
        invoice.paid_amount = invoice.total_amount

    if is_automatic_transition(from_status, new_status):
        metadata = {**(metadata or {}), "automatic": True}

    updated = await invoice_repo.update(invoice)

    await history_repo.create(
        InvoiceStatusHistory(
            invoice_id=invoice.id,
            user_id=user_id,
            from_status=from_status,
            to_status=new_status,
            reason=reason or get_transition_description(from_status, new_status),
            change_metadata=metadata,
            created_at=now,
        )
    )

    return updated
