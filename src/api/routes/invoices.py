"""Invoice API Routes

FastAPI routes for invoice lifecycle: CRUD, status workflow, PDF and e-mail.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.auth import get_current_user_id
from src.api.error import ClientError, error_example
from src.api.schemas.invoice_request import (
    ChangeStatusRequestSchema,
    CreateInvoiceRequestSchema,
    SendInvoiceRequestSchema,
    UpdateInvoiceRequestSchema,
)
from src.app.services.email_service import EmailService
from src.app.services.pdf_service import PdfService
from src.app.use_cases.invoices import (
    AllowedTransitionsResponseDTO,
    ChangeInvoiceStatus,
    ChangeInvoiceStatusCommandDTO,
    CreateInvoice,
    CreateInvoiceCommandDTO,
    DeleteInvoice,
    GenerateInvoicePdf,
    GetAllowedTransitions,
    GetInvoice,
    GetStatusHistory,
    InvoiceDetailResponseDTO,
    InvoiceResponseDTO,
    ListInvoices,
    ListInvoicesResponseDTO,
    SendInvoice,
    SendInvoiceCommandDTO,
    SendInvoiceResponseDTO,
    StatusHistoryResponseDTO,
    UpdateInvoice,
    UpdateInvoiceCommandDTO,
)
from src.adapter.repositories.client_repository import SqlAlchemyClientRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.invoice_status_history_repository import (
    SqlAlchemyInvoiceStatusHistoryRepository,
)
from src.adapter.repositories.line_item_repository import SqlAlchemyLineItemRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_email_service, get_pdf_service, get_session
from src.domain.invoice import InvoiceStatus

router = APIRouter(prefix="/invoices", tags=["Invoices"])

INVOICE_NOT_FOUND = error_example(
    "Invoice not found", "INVOICE_NOT_FOUND", "Invoice 5b1d7e3c-8f4a-4c2e-9d6b-1a3f5e7c9b20 not found"
)
INVOICE_FORBIDDEN = error_example(
    "Invoice belongs to another user", "FORBIDDEN", "You do not have access to this invoice"
)


@router.get("", response_model=ListInvoicesResponseDTO)
async def list_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    client_id: Optional[str] = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    List invoices of the authenticated user, newest invoice date first.

    **Query parameters:**
    - `status` (optional): Filter by status
    - `client_id` (optional): Filter by client
    - `limit` (optional): 1-100, default 20
    - `offset` (optional): default 0

    Deleted invoices are never listed.
    """
    use_case = ListInvoices(SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(
        user_id, status=status_filter, client_id=client_id, limit=limit, offset=offset
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: error_example("Client not found", "CLIENT_NOT_FOUND", "Client 123 not found"),
        400: error_example(
            "Due date before invoice date",
            "INVALID_DUE_DATE",
            "Due date 2024-02-01 is before invoice date 2024-03-01",
        ),
    },
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Create a draft invoice.

    The invoice number is allocated per user as `{prefix}-{YYYYMM}-{sequence:05d}`.
    Amounts start from `subtotal_amount` until line items are added.

    **Example request:**
    ```json
    {
      "client_id": "a2e4c6b8-1d3f-4e5a-9b7c-0f2e4d6a8c10",
      "invoice_date": "2024-03-01",
      "description": "Web development - March 2024",
      "subtotal_amount": "1000.00"
    }
    ```

    **Returns:**
    - 201: Draft invoice created
    - 400: Invalid dates
    - 403/404: Client not accessible
    """
    uow = SqlAlchemyUnitOfWork(session)

    use_case = CreateInvoice(
        uow,
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyClientRepository(session),
        invoice_number_prefix=ApplicationConfig.INVOICE_NUMBER_PREFIX,
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
        default_tax_rate=Decimal(str(ApplicationConfig.DEFAULT_TAX_RATE)),
        payment_days=ApplicationConfig.DEFAULT_PAYMENT_DAYS,
    )
    command = CreateInvoiceCommandDTO(user_id=user_id, **request.model_dump())

    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailResponseDTO,
    responses={404: INVOICE_NOT_FOUND, 403: INVOICE_FORBIDDEN},
)
async def get_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Get an invoice with its client, line items and allowed next statuses.

    Deleted invoices are still returned (with `deleted_at` set).
    """
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyLineItemRepository(session),
        SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(user_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={
        404: INVOICE_NOT_FOUND,
        403: INVOICE_FORBIDDEN,
        409: error_example(
            "Billing fields are frozen",
            "INVOICE_NOT_EDITABLE",
            "Invoice INV-202403-00001 is SENT and can no longer be modified",
        ),
    },
)
async def update_invoice(
    invoice_id: str,
    request: UpdateInvoiceRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Update an invoice.

    Billing fields (client, dates, currency, tax rate, subtotal) can only
    change while the invoice is DRAFT. Totals are recomputed after every update.
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = UpdateInvoice(
        uow,
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyLineItemRepository(session),
    )
    command = UpdateInvoiceCommandDTO(
        user_id=user_id,
        invoice_id=invoice_id,
        **request.model_dump(exclude_unset=True),
    )

    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: INVOICE_NOT_FOUND, 403: INVOICE_FORBIDDEN},
)
async def delete_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Soft-delete an invoice. It disappears from listings but stays readable by id."""
    uow = SqlAlchemyUnitOfWork(session)
    result = await DeleteInvoice(uow, SqlAlchemyInvoiceRepository(session)).execute(user_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    responses={
        404: INVOICE_NOT_FOUND,
        403: INVOICE_FORBIDDEN,
        409: error_example(
            "Transition not allowed",
            "INVALID_STATUS_TRANSITION",
            "Cannot transition from DRAFT to PAID",
        ),
    },
)
async def change_invoice_status(
    invoice_id: str,
    request: ChangeStatusRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Change the status of an invoice.

    The transition is validated against the invoice workflow and recorded
    in the status history together with `reason` and `metadata`.

    **Allowed transitions:**
    - DRAFT -> SENT, CANCELLED
    - SENT -> VIEWED, PAID, OVERDUE, CANCELLED
    - VIEWED -> PAID, OVERDUE, CANCELLED
    - OVERDUE -> PAID, CANCELLED
    - PAID -> REFUNDED, CANCELLED
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = ChangeInvoiceStatus(
        uow,
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyLineItemRepository(session),
        SqlAlchemyInvoiceStatusHistoryRepository(session),
    )
    command = ChangeInvoiceStatusCommandDTO(
        user_id=user_id,
        invoice_id=invoice_id,
        status=request.status,
        reason=request.reason,
        metadata=request.metadata,
    )

    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}/status-history",
    response_model=StatusHistoryResponseDTO,
    responses={404: INVOICE_NOT_FOUND, 403: INVOICE_FORBIDDEN},
)
async def get_status_history(
    invoice_id: str,
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Status history of an invoice, newest first."""
    use_case = GetStatusHistory(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceStatusHistoryRepository(session),
    )
    result = await use_case.execute(user_id, invoice_id, limit=limit, offset=offset)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}/allowed-transitions",
    response_model=AllowedTransitionsResponseDTO,
    responses={404: INVOICE_NOT_FOUND, 403: INVOICE_FORBIDDEN},
)
async def get_allowed_transitions(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Statuses the invoice can move to next, with their descriptions."""
    result = await GetAllowedTransitions(SqlAlchemyInvoiceRepository(session)).execute(
        user_id, invoice_id
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.api_route(
    "/{invoice_id}/pdf",
    methods=["GET", "POST"],
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: INVOICE_NOT_FOUND,
        403: INVOICE_FORBIDDEN,
    },
)
async def download_invoice_pdf(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """
    Download the invoice as a PDF file.

    **Returns:**
    - 200: PDF file as binary response
    - 403/404: Invoice not accessible
    """
    use_case = GenerateInvoicePdf(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyLineItemRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyUserRepository(session),
        pdf_service,
    )
    result = await use_case.execute(user_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(
        content=result.value.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.value.filename}"'
        }
    )


@router.post(
    "/{invoice_id}/send",
    response_model=SendInvoiceResponseDTO,
    responses={
        404: INVOICE_NOT_FOUND,
        403: INVOICE_FORBIDDEN,
        409: error_example(
            "Invoice cannot be sent",
            "INVOICE_NOT_SENDABLE",
            "Invoice INV-202403-00001 is CANCELLED and cannot be sent",
        ),
        502: error_example(
            "E-mail delivery failed",
            "EMAIL_DELIVERY_FAILED",
            "Invoice INV-202403-00001 could not be delivered to compta@acme.fr",
        ),
    },
)
async def send_invoice(
    invoice_id: str,
    request: Optional[SendInvoiceRequestSchema] = None,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    email_service: EmailService = Depends(get_email_service),
):
    """
    E-mail the invoice PDF to the client.

    A DRAFT invoice (with at least one line item) moves to SENT; invoices
    already SENT, VIEWED, OVERDUE or PAID are re-sent without a status
    change. If delivery fails nothing is saved.

    **Request body (optional):**
    - `recipient_email`: Defaults to the client's e-mail
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = SendInvoice(
        uow,
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyLineItemRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyUserRepository(session),
        SqlAlchemyInvoiceStatusHistoryRepository(session),
        pdf_service,
        email_service,
    )
    command = SendInvoiceCommandDTO(
        user_id=user_id,
        invoice_id=invoice_id,
        recipient_email=request.recipient_email if request else None,
    )

    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
