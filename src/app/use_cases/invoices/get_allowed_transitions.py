"""GetAllowedTransitions Use Case"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.common import load_owned_invoice
from src.domain.invoice_workflow import (
    get_allowed_next_statuses,
    get_transition_description,
    is_automatic_transition,
)
from .dtos import AllowedTransitionsResponseDTO, TransitionOptionDTO


class GetAllowedTransitions:
    """Use case: List the statuses an invoice can move to from its current status"""

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, user_id: str, invoice_id: str) -> Result[AllowedTransitionsResponseDTO]:
        loaded = await load_owned_invoice(self.invoice_repo, invoice_id, user_id)
        if loaded.is_err():
            return loaded
        invoice = loaded.value

        transitions = [
            TransitionOptionDTO(
                status=next_status,
                description=get_transition_description(invoice.status, next_status),
                automatic=is_automatic_transition(invoice.status, next_status),
            )
            for next_status in get_allowed_next_statuses(invoice.status)
        ]

        return Return.ok(
            AllowedTransitionsResponseDTO(
                invoice_id=invoice.id,
                current_status=invoice.status,
                transitions=transitions,
            )
        )
