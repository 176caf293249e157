"""Invoice status workflow

Allowed transitions and the checks each transition requires.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple
from src.domain.invoice import Invoice, InvoiceStatus


ALLOWED_TRANSITIONS: Dict[InvoiceStatus, List[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: [InvoiceStatus.SENT, InvoiceStatus.CANCELLED],
    InvoiceStatus.SENT: [
        InvoiceStatus.VIEWED,
        InvoiceStatus.PAID,
        InvoiceStatus.OVERDUE,
        InvoiceStatus.CANCELLED,
    ],
    InvoiceStatus.VIEWED: [InvoiceStatus.PAID, InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED],
    InvoiceStatus.OVERDUE: [InvoiceStatus.PAID, InvoiceStatus.CANCELLED],
    InvoiceStatus.PAID: [InvoiceStatus.REFUNDED, InvoiceStatus.CANCELLED],
    InvoiceStatus.CANCELLED: [],
    InvoiceStatus.REFUNDED: [],
}


@dataclass(frozen=True)
class TransitionRequirement:
    description: str
    requires_line_items: bool = False
    requires_due_date_passed: bool = False
    automatic: bool = False


TRANSITION_REQUIREMENTS: Dict[Tuple[InvoiceStatus, InvoiceStatus], TransitionRequirement] = {
    (InvoiceStatus.DRAFT, InvoiceStatus.SENT): TransitionRequirement(
        "Sending invoice", requires_line_items=True
    ),
    (InvoiceStatus.DRAFT, InvoiceStatus.CANCELLED): TransitionRequirement("Cancelling draft invoice"),
    (InvoiceStatus.SENT, InvoiceStatus.VIEWED): TransitionRequirement("Invoice viewed by client"),
    (InvoiceStatus.SENT, InvoiceStatus.PAID): TransitionRequirement("Marking invoice as paid"),
    (InvoiceStatus.SENT, InvoiceStatus.OVERDUE): TransitionRequirement(
        "Auto-marking invoice as overdue", requires_due_date_passed=True, automatic=True
    ),
    (InvoiceStatus.SENT, InvoiceStatus.CANCELLED): TransitionRequirement("Cancelling sent invoice"),
    (InvoiceStatus.VIEWED, InvoiceStatus.PAID): TransitionRequirement("Marking viewed invoice as paid"),
    (InvoiceStatus.VIEWED, InvoiceStatus.OVERDUE): TransitionRequirement(
        "Auto-marking viewed invoice as overdue", requires_due_date_passed=True, automatic=True
    ),
    (InvoiceStatus.VIEWED, InvoiceStatus.CANCELLED): TransitionRequirement("Cancelling viewed invoice"),
    (InvoiceStatus.OVERDUE, InvoiceStatus.PAID): TransitionRequirement("Marking overdue invoice as paid"),
    (InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED): TransitionRequirement("Cancelling overdue invoice"),
    (InvoiceStatus.PAID, InvoiceStatus.REFUNDED): TransitionRequirement("Refunding paid invoice"),
    (InvoiceStatus.PAID, InvoiceStatus.CANCELLED): TransitionRequirement(
        "Cancelling paid invoice (reversal)"
    ),
}

# Statuses from which an invoice can still become overdue
OPEN_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.VIEWED)


def get_allowed_next_statuses(current_status: InvoiceStatus) -> List[InvoiceStatus]:
    return list(ALLOWED_TRANSITIONS.get(current_status, []))


def is_transition_allowed(current_status: InvoiceStatus, new_status: InvoiceStatus) -> bool:
    return new_status in ALLOWED_TRANSITIONS.get(current_status, [])


def get_transition_description(current_status: InvoiceStatus, new_status: InvoiceStatus) -> str:
    requirement = TRANSITION_REQUIREMENTS.get((current_status, new_status))
    if requirement:
        return requirement.description
    return f"Transition from {current_status.value} to {new_status.value}"


def is_automatic_transition(current_status: InvoiceStatus, new_status: InvoiceStatus) -> bool:
    requirement = TRANSITION_REQUIREMENTS.get((current_status, new_status))
    return bool(requirement and requirement.automatic)


def is_invoice_overdue(invoice: Invoice, today: Optional[date] = None) -> bool:
    """
    Check whether an open invoice is past its due date

    Args:
        invoice: Invoice to check
        today: Reference date (defaults to date.today())

    Returns:
        True if status is SENT or VIEWED and due_date < today
    """
    today = today or date.today()
    if invoice.status not in OPEN_STATUSES:
        return False
    return invoice.due_date < today


def validate_transition(
    invoice: Invoice,
    new_status: InvoiceStatus,
    line_item_count: int = 0,
    today: Optional[date] = None,
) -> List[str]:
    """
    Validate a status change against the workflow

    Args:
        invoice: Invoice in its current state
        new_status: Requested status
        line_item_count: Number of live line items on the invoice
        today: Reference date for due-date checks (defaults to date.today())

    Returns:
        List of violation messages, empty when the transition is allowed
    """
    current_status = invoice.status

    if not is_transition_allowed(current_status, new_status):
        return [f"Cannot transition from {current_status.value} to {new_status.value}"]

    requirement = TRANSITION_REQUIREMENTS[(current_status, new_status)]
    errors = []

    if requirement.requires_line_items and line_item_count < 1:
        errors.append("Invoice must have at least one line item to be sent")

    if requirement.requires_due_date_passed:
        today = today or date.today()
        if invoice.due_date >= today:
            errors.append("Invoice is not overdue yet")

    return errors
