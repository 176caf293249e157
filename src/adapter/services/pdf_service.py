"""ReportLab PDF Generation Service Implementation

Implements invoice PDF generation using ReportLab library.
"""

from io import BytesIO
from typing import List, Optional
from decimal import Decimal
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.line_item import LineItem
from src.domain.user import User

DATE_FORMAT = "%d/%m/%Y"


def _money(amount: Optional[Decimal], currency: str) -> str:
    return f"{Decimal(amount or 0):,.2f} {currency}"


def _quantity(quantity: Decimal) -> str:
    return f"{quantity:,.2f}".rstrip("0").rstrip(".")


def _paragraphs(lines: List[Optional[str]], style) -> list:
    """Wrap non-empty lines as escaped paragraphs"""
    return [Paragraph(escape(line), style) for line in lines if line]


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Generates the invoice document: issuer header, Bill To block,
    line items table, totals and payment footer.
    """

    def generate_invoice(
        self,
        invoice: Invoice,
        client: Client,
        user: User,
        line_items: List[LineItem],
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice entity with amounts and dates
            client: Billed client
            user: Issuing user
            line_items: Live line items in display order

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.invoice_number}",
        )

        styles = getSampleStyleSheet()
        elements = []
        currency = invoice.currency

        # Custom styles
        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=20,
            spaceAfter=6,
            textColor=colors.HexColor("#2C3E50"),
        )
        invoice_label_style = ParagraphStyle(
            "InvoiceLabelStyle",
            parent=styles["Heading2"],
            fontSize=16,
            textColor=colors.HexColor("#2980B9"),
            spaceAfter=12,
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=9,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )
        cell_style = ParagraphStyle(
            "CellStyle",
            parent=styles["Normal"],
            fontSize=9,
        )

        # Header - issuer info
        elements.append(Paragraph(escape(user.company_name or user.full_name), title_style))
        elements.extend(
            _paragraphs(
                [
                    user.company_address,
                    user.company_phone,
                    user.email,
                    f"SIRET: {user.siret}" if user.siret else None,
                ],
                header_style,
            )
        )
        elements.append(Spacer(1, 8 * mm))
        elements.append(Paragraph("INVOICE", invoice_label_style))

        # Invoice details
        invoice_info = [
            ["Invoice Number:", invoice.invoice_number],
            ["Invoice Date:", invoice.invoice_date.strftime(DATE_FORMAT)],
            ["Due Date:", invoice.due_date.strftime(DATE_FORMAT)],
            ["Status:", invoice.status.value],
        ]
        if invoice.paid_date:
            invoice_info.append(["Paid On:", invoice.paid_date.strftime(DATE_FORMAT)])

        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(invoice_table)
        elements.append(Spacer(1, 8 * mm))

        # Bill To
        elements.append(Paragraph("Bill To:", bold_style))
        postal_city = " ".join(part for part in [client.postal_code, client.city] if part)
        elements.extend(
            _paragraphs(
                [
                    client.company_name,
                    client.name,
                    client.contact_person,
                    client.address,
                    postal_city,
                    client.country,
                    client.email,
                    f"SIRET: {client.siret}" if client.siret else None,
                    f"VAT: {client.vat_number}" if client.vat_number else None,
                ],
                normal_style,
            )
        )
        elements.append(Spacer(1, 8 * mm))

        if invoice.description:
            elements.append(Paragraph(escape(invoice.description), normal_style))
            elements.append(Spacer(1, 5 * mm))

        # Line items
        line_data = [["Description", "Qty", "Unit Price", "Tax", "Total"]]
        if line_items:
            for line in line_items:
                tax_label = "incl." if line.tax_included else f"{line.tax_rate:.2f}%"
                line_data.append(
                    [
                        Paragraph(escape(line.description), cell_style),
                        _quantity(line.quantity),
                        _money(line.unit_price, currency),
                        tax_label,
                        _money(line.total, currency),
                    ]
                )
        else:
            # Invoices without line items carry a manual subtotal
            line_data.append(
                [
                    Paragraph(escape(invoice.description or "Services"), cell_style),
                    "1",
                    _money(invoice.subtotal_amount, currency),
                    f"{invoice.tax_rate:.2f}%",
                    _money(invoice.subtotal_amount, currency),
                ]
            )

        col_widths = [70 * mm, 15 * mm, 30 * mm, 20 * mm, 35 * mm]
        line_table = Table(line_data, colWidths=col_widths, repeatRows=1)
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    # Grid
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )

        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        totals_data = [
            ["", "", "Subtotal:", _money(invoice.subtotal_amount, currency)],
            ["", "", f"Tax ({invoice.tax_rate:.2f}%):", _money(invoice.tax_amount, currency)],
            ["", "", "Total:", _money(invoice.total_amount, currency)],
        ]
        if invoice.paid_amount:
            totals_data.append(["", "", "Paid:", _money(invoice.paid_amount, currency)])
            totals_data.append(["", "", "Balance Due:", _money(invoice.balance_due, currency)])

        totals_table = Table(totals_data, colWidths=[70 * mm, 15 * mm, 50 * mm, 35 * mm])
        totals_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("FONTNAME", (2, 2), (-1, 2), "Helvetica-Bold"),
                    ("LINEABOVE", (2, 2), (-1, 2), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )

        elements.append(totals_table)
        elements.append(Spacer(1, 12 * mm))

        # Footer - payment details
        footer_style = ParagraphStyle(
            "FooterNote",
            parent=styles["Normal"],
            fontSize=9,
            textColor=colors.HexColor("#7F8C8D"),
        )
        footer_lines = [
            f"Payment terms: {invoice.payment_terms}" if invoice.payment_terms else None,
            invoice.payment_instructions,
            f"Bank: {user.bank_name}" if user.bank_name else None,
            f"IBAN: {user.iban}" if user.iban else None,
            f"BIC: {user.bic}" if user.bic else None,
            invoice.notes,
        ]
        footer = _paragraphs(footer_lines, footer_style)
        if footer:
            elements.append(Paragraph("Payment Information", bold_style))
            elements.extend(footer)

        # Build PDF
        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
