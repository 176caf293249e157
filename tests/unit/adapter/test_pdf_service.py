"""Unit tests for ReportLabPdfService"""

from datetime import date
from decimal import Decimal

from src.adapter.services.pdf_service import ReportLabPdfService
from src.domain.invoice import InvoiceStatus


def test_renders_pdf_document(make_invoice, make_line_item, sample_client, sample_user):
    invoice = make_invoice(
        subtotal_amount=Decimal("2250.00"),
        tax_amount=Decimal("450.00"),
        total_amount=Decimal("2700.00"),
        payment_terms="30 days net",
        notes="Thank you & see you soon <3",
    )

    pdf = ReportLabPdfService().generate_invoice(
        invoice=invoice,
        client=sample_client,
        user=sample_user,
        line_items=[make_line_item()],
    )

    assert pdf.startswith(b"%PDF")
    assert len(pdf) > 1000


def test_renders_without_line_items(make_invoice, sample_client, sample_user):
    pdf = ReportLabPdfService().generate_invoice(
        invoice=make_invoice(),
        client=sample_client,
        user=sample_user,
        line_items=[],
    )

    assert pdf.startswith(b"%PDF")


def test_renders_paid_invoice_with_minimal_profile(make_invoice, make_line_item, sample_client, sample_user):
    sample_user.company_name = None
    sample_user.siret = None
    sample_user.iban = None
    sample_user.bic = None
    invoice = make_invoice(
        status=InvoiceStatus.PAID,
        paid_date=date(2024, 3, 20),
        paid_amount=Decimal("120.00"),
    )

    pdf = ReportLabPdfService().generate_invoice(
        invoice=invoice,
        client=sample_client,
        user=sample_user,
        line_items=[make_line_item(tax_included=True, tax_amount=Decimal("0.00"))],
    )

    assert pdf.startswith(b"%PDF")
