"""Integration tests for Line Item API endpoints

Every change to a line item must leave the invoice totals equal to the
sum of its live line items, with total = subtotal + tax.
"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from src.domain.invoice import InvoiceStatus

API = "/api"


def _url(invoice_id, line_item_id=None):
    base = f"{API}/invoices/{invoice_id}/line-items"
    return f"{base}/{line_item_id}" if line_item_id else base


def _assert_consistent(totals):
    assert Decimal(totals["total_amount"]) == (
        Decimal(totals["subtotal_amount"]) + Decimal(totals["tax_amount"])
    )


@pytest.mark.asyncio
class TestLineItemsAPI:

    async def test_add_line_items_updates_totals(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice()

        first = await client.post(
            _url(invoice.id),
            json={"description": "Development", "quantity": "5", "unit_price": "450.00"},
            headers=auth_headers,
        )
        _assert_consistent(first.json()["invoice_totals"])
        second = await client.post(
            _url(invoice.id),
            json={
                "description": "Books",
                "quantity": "2",
                "unit_price": "30.00",
                "tax_rate": "5.5",
            },
            headers=auth_headers,
        )

        assert first.status_code == 201
        assert first.json()["line_item"]["line_order"] == 0
        assert second.json()["line_item"]["line_order"] == 1

        totals = second.json()["invoice_totals"]
        _assert_consistent(totals)
        assert Decimal(totals["subtotal_amount"]) == Decimal("2310.00")
        assert Decimal(totals["tax_amount"]) == Decimal("453.30")
        assert Decimal(totals["total_amount"]) == Decimal("2763.30")

        listing = await client.get(_url(invoice.id), headers=auth_headers)
        assert [li["description"] for li in listing.json()["line_items"]] == ["Development", "Books"]

        detail = await client.get(f"{API}/invoices/{invoice.id}", headers=auth_headers)
        assert Decimal(detail.json()["total_amount"]) == Decimal("2763.30")

    async def test_mixed_lines_stay_consistent(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice()
        invoice_id = invoice.id
        lines = [
            {"description": "Audit", "quantity": "1.5", "unit_price": "99.99", "tax_rate": "10"},
            {"description": "Licence", "quantity": "3", "unit_price": "19.99", "tax_included": True},
            {"description": "Travel", "quantity": "7", "unit_price": "0.33", "tax_rate": "2.1"},
        ]

        created = []
        for line in lines:
            response = await client.post(_url(invoice_id), json=line, headers=auth_headers)
            assert response.status_code == 201
            _assert_consistent(response.json()["invoice_totals"])
            created.append(response.json()["line_item"]["id"])

        updated = await client.put(
            _url(invoice_id, created[0]), json={"quantity": "0.75"}, headers=auth_headers
        )
        _assert_consistent(updated.json()["invoice_totals"])

        deleted = await client.delete(_url(invoice_id, created[1]), headers=auth_headers)
        totals = deleted.json()["invoice_totals"]
        _assert_consistent(totals)
        # 0.75 x 99.99 = 74.99 (+7.50), 7 x 0.33 = 2.31 (+0.05)
        assert Decimal(totals["subtotal_amount"]) == Decimal("77.30")
        assert Decimal(totals["tax_amount"]) == Decimal("7.55")

    async def test_update_line_item(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice()
        created = await client.post(
            _url(invoice.id),
            json={"description": "Development", "quantity": "5", "unit_price": "450.00"},
            headers=auth_headers,
        )
        line_item_id = created.json()["line_item"]["id"]

        response = await client.put(
            _url(invoice.id, line_item_id),
            json={"quantity": "2", "tax_included": True},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        _assert_consistent(data["invoice_totals"])
        assert Decimal(data["line_item"]["amount"]) == Decimal("900.00")
        assert Decimal(data["line_item"]["tax_amount"]) == Decimal("0")
        assert Decimal(data["invoice_totals"]["total_amount"]) == Decimal("900.00")

    async def test_delete_line_item(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice()
        first = await client.post(
            _url(invoice.id),
            json={"description": "Development", "quantity": "1", "unit_price": "100"},
            headers=auth_headers,
        )
        await client.post(
            _url(invoice.id),
            json={"description": "Hosting", "quantity": "1", "unit_price": "50"},
            headers=auth_headers,
        )
        first_id = first.json()["line_item"]["id"]

        response = await client.delete(_url(invoice.id, first_id), headers=auth_headers)

        assert response.status_code == 200
        _assert_consistent(response.json()["invoice_totals"])
        assert Decimal(response.json()["invoice_totals"]["subtotal_amount"]) == Decimal("50.00")
        assert Decimal(response.json()["invoice_totals"]["total_amount"]) == Decimal("60.00")

        listing = await client.get(_url(invoice.id), headers=auth_headers)
        assert len(listing.json()["line_items"]) == 1

        # Deleted rows stay retrievable by id
        deleted = await client.get(_url(invoice.id, first_id), headers=auth_headers)
        assert deleted.status_code == 200
        assert deleted.json()["deleted_at"] is not None

    async def test_delete_last_line_item_zeroes_totals(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice()
        created = await client.post(
            _url(invoice.id),
            json={"description": "Development", "quantity": "1", "unit_price": "100"},
            headers=auth_headers,
        )

        response = await client.delete(
            _url(invoice.id, created.json()["line_item"]["id"]), headers=auth_headers
        )

        _assert_consistent(response.json()["invoice_totals"])
        assert Decimal(response.json()["invoice_totals"]["total_amount"]) == Decimal("0")

    async def test_delete_below_paid_amount(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice()
        invoice_id = invoice.id
        created = await client.post(
            _url(invoice_id),
            json={"description": "Development", "quantity": "1", "unit_price": "100"},
            headers=auth_headers,
        )
        line_item_id = created.json()["line_item"]["id"]
        paid = await client.put(
            f"{API}/invoices/{invoice_id}", json={"paid_amount": "120"}, headers=auth_headers
        )
        assert paid.status_code == 200

        response = await client.delete(_url(invoice_id, line_item_id), headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "PAID_AMOUNT_EXCEEDS_TOTAL"

        detail = await client.get(f"{API}/invoices/{invoice_id}", headers=auth_headers)
        assert Decimal(detail.json()["total_amount"]) == Decimal("120.00")
        assert Decimal(detail.json()["paid_amount"]) <= Decimal(detail.json()["total_amount"])
        listing = await client.get(_url(invoice_id), headers=auth_headers)
        assert len(listing.json()["line_items"]) == 1

    async def test_update_below_paid_amount(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice()
        invoice_id = invoice.id
        created = await client.post(
            _url(invoice_id),
            json={"description": "Development", "quantity": "2", "unit_price": "100"},
            headers=auth_headers,
        )
        line_item_id = created.json()["line_item"]["id"]
        await client.put(
            f"{API}/invoices/{invoice_id}", json={"paid_amount": "200"}, headers=auth_headers
        )

        response = await client.put(
            _url(invoice_id, line_item_id), json={"quantity": "1"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "PAID_AMOUNT_EXCEEDS_TOTAL"

        line = await client.get(_url(invoice_id, line_item_id), headers=auth_headers)
        assert Decimal(line.json()["quantity"]) == Decimal("2")
        detail = await client.get(f"{API}/invoices/{invoice_id}", headers=auth_headers)
        assert Decimal(detail.json()["total_amount"]) == Decimal("240.00")

    async def test_sent_invoice_is_locked(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice(status=InvoiceStatus.SENT)

        response = await client.post(
            _url(invoice.id),
            json={"description": "Extra", "quantity": "1", "unit_price": "10"},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVOICE_NOT_EDITABLE"

    async def test_zero_quantity_rejected(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice()

        response = await client.post(
            _url(invoice.id),
            json={"description": "Nothing", "quantity": "0", "unit_price": "10"},
            headers=auth_headers,
        )

        assert response.status_code == 422

    async def test_other_users_invoice(self, client: AsyncClient, other_auth_headers, make_invoice):
        invoice = await make_invoice()

        response = await client.get(_url(invoice.id), headers=other_auth_headers)

        assert response.status_code == 403

    async def test_unknown_line_item(self, client: AsyncClient, auth_headers, make_invoice):
        invoice = await make_invoice()

        response = await client.get(_url(invoice.id, "missing"), headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LINE_ITEM_NOT_FOUND"
