"""CreateInvoice Use Case

Creates a draft invoice for one of the user's clients.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.common import inactive_client_error, load_owned_client
from src.domain.calculations import calculate_tax, round_money
from src.domain.invoice import Invoice, InvoiceStatus
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


def format_invoice_number(prefix: str, invoice_date: date, sequence: int) -> str:
    """INV-202401-00001"""
    return f"{prefix}-{invoice_date.strftime('%Y%m')}-{sequence:05d}"


class CreateInvoice:
    """
    Use Case: Create draft invoice

    Business Rules:
    1. Client must belong to the user and be active
    2. Invoice number is {prefix}-{YYYYMM}-{sequence:05d}, sequence per user
    3. due_date defaults to invoice_date + payment delay and cannot precede it
    4. total_amount = subtotal_amount + tax_amount
    5. Invoice is created with status=DRAFT and no history entry

    Flow:
    1. Check client ownership and status
    2. Resolve dates and validate them
    3. Allocate invoice number
    4. Compute amounts
    5. Create invoice and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        client_repo: ClientRepository,
        invoice_number_prefix: str = "INV",
        default_currency: str = "EUR",
        default_tax_rate: Decimal = Decimal("20"),
        payment_days: int = 30,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.client_repo = client_repo
        self.invoice_number_prefix = invoice_number_prefix
        self.default_currency = default_currency
        self.default_tax_rate = Decimal(str(default_tax_rate))
        self.payment_days = payment_days

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            # Step 1: Client ownership and status
            loaded = await load_owned_client(self.client_repo, command.client_id, command.user_id)
            if loaded.is_err():
                return loaded
            client_error = inactive_client_error(loaded.value)
            if client_error:
                return Return.err(client_error)

            # Step 2: Dates
            invoice_date = command.invoice_date or date.today()
            due_date = command.due_date or invoice_date + timedelta(days=self.payment_days)
            if due_date < invoice_date:
                return Return.err(
                    Error(
                        code="INVALID_DUE_DATE",
                        message="Due date must not be before invoice date",
                        reason=f"invoice_date={invoice_date}, due_date={due_date}",
                    )
                )

            # Step 3: Invoice number
            sequence = await self.invoice_repo.next_invoice_sequence(command.user_id)
            prefix = command.invoice_prefix or self.invoice_number_prefix
            invoice_number = format_invoice_number(prefix, invoice_date, sequence)

            # Step 4: Amounts
            tax_rate = command.tax_rate if command.tax_rate is not None else self.default_tax_rate
            subtotal = round_money(command.subtotal_amount)
            tax_amount = calculate_tax(subtotal, tax_rate)

            # Step 5: Create invoice
            invoice = Invoice(
                user_id=command.user_id,
                client_id=command.client_id,
                invoice_number=invoice_number,
                invoice_sequence=sequence,
                invoice_date=invoice_date,
                due_date=due_date,
                status=InvoiceStatus.DRAFT,
                description=command.description,
                notes=command.notes,
                currency=(command.currency or self.default_currency).upper(),
                tax_rate=round_money(tax_rate),
                subtotal_amount=subtotal,
                tax_amount=tax_amount,
                total_amount=subtotal + tax_amount,
                paid_amount=Decimal("0.00"),
                payment_terms=command.payment_terms,
                payment_instructions=command.payment_instructions,
            )
            created = await self.invoice_repo.create(invoice)

            await self.uow.commit()

            logger.info(f"Created invoice {created.invoice_number} for user {command.user_id}")
            return Return.ok(InvoiceResponseDTO.model_validate(created))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
