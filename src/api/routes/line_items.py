"""Line Item API Routes

FastAPI routes for the line items of an invoice. Every mutation returns
the recomputed invoice totals.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import get_current_user_id
from src.api.error import ClientError, error_example
from src.api.schemas.line_item_request import AddLineItemRequestSchema, UpdateLineItemRequestSchema
from src.app.use_cases.line_items import (
    AddLineItem,
    AddLineItemCommandDTO,
    DeleteLineItem,
    GetLineItem,
    LineItemMutationResponseDTO,
    LineItemResponseDTO,
    ListLineItems,
    ListLineItemsResponseDTO,
    UpdateLineItem,
    UpdateLineItemCommandDTO,
)
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.line_item_repository import SqlAlchemyLineItemRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session

router = APIRouter(prefix="/invoices/{invoice_id}/line-items", tags=["Line Items"])

NOT_EDITABLE = error_example(
    "Invoice is no longer a draft",
    "INVOICE_NOT_EDITABLE",
    "Invoice INV-202403-00001 is SENT and can no longer be modified",
)
LINE_ITEM_NOT_FOUND = error_example(
    "Line item not found",
    "LINE_ITEM_NOT_FOUND",
    "Line item 9c8b7a6d-5e4f-4a3b-2c1d-0e9f8a7b6c5d not found on this invoice",
)


@router.get("", response_model=ListLineItemsResponseDTO)
async def list_line_items(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Live line items of an invoice in display order, with invoice totals."""
    use_case = ListLineItems(SqlAlchemyInvoiceRepository(session), SqlAlchemyLineItemRepository(session))
    result = await use_case.execute(user_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "",
    response_model=LineItemMutationResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={409: NOT_EDITABLE},
)
async def add_line_item(
    invoice_id: str,
    request: AddLineItemRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Add a line item to a DRAFT invoice.

    `amount = quantity x unit_price`; tax is computed from `tax_rate`
    unless `tax_included` is set. Invoice totals are recomputed.

    **Example request:**
    ```json
    {
      "description": "Development - 5 days",
      "quantity": "5",
      "unit_price": "450.00",
      "tax_rate": "20.00"
    }
    ```
    """
    uow = SqlAlchemyUnitOfWork(session)
    use_case = AddLineItem(uow, SqlAlchemyInvoiceRepository(session), SqlAlchemyLineItemRepository(session))

    command = AddLineItemCommandDTO(user_id=user_id, invoice_id=invoice_id, **request.model_dump())

    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{line_item_id}",
    response_model=LineItemResponseDTO,
    responses={404: LINE_ITEM_NOT_FOUND},
)
async def get_line_item(
    invoice_id: str,
    line_item_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetLineItem(SqlAlchemyInvoiceRepository(session), SqlAlchemyLineItemRepository(session))
    result = await use_case.execute(user_id, invoice_id, line_item_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{line_item_id}",
    response_model=LineItemMutationResponseDTO,
    responses={404: LINE_ITEM_NOT_FOUND, 409: NOT_EDITABLE},
)
async def update_line_item(
    invoice_id: str,
    line_item_id: str,
    request: UpdateLineItemRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Update a line item of a DRAFT invoice; amounts and totals are recomputed."""
    uow = SqlAlchemyUnitOfWork(session)
    use_case = UpdateLineItem(uow, SqlAlchemyInvoiceRepository(session), SqlAlchemyLineItemRepository(session))

    command = UpdateLineItemCommandDTO(
        user_id=user_id,
        invoice_id=invoice_id,
        line_item_id=line_item_id,
        **request.model_dump(exclude_unset=True),
    )

    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{line_item_id}",
    response_model=LineItemMutationResponseDTO,
    responses={404: LINE_ITEM_NOT_FOUND, 409: NOT_EDITABLE},
)
async def delete_line_item(
    invoice_id: str,
    line_item_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Soft-delete a line item of a DRAFT invoice and recompute totals."""
    uow = SqlAlchemyUnitOfWork(session)
    use_case = DeleteLineItem(uow, SqlAlchemyInvoiceRepository(session), SqlAlchemyLineItemRepository(session))

    result = await use_case.execute(user_id, invoice_id, line_item_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
