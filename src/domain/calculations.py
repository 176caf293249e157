"""Invoice arithmetic

Line and invoice amounts are Decimal, rounded half-up to 2 places.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class LineAmounts:
    amount: Decimal
    tax_amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so floats like 0.1 do not carry binary noise
    return Decimal(str(value))


def round_money(value: Number) -> Decimal:
    """Round to 2 decimal places, half-up"""
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def calculate_tax(subtotal: Number, tax_rate: Number) -> Decimal:
    """Tax on a subtotal at a percentage rate"""
    return round_money(to_decimal(subtotal) * to_decimal(tax_rate) / HUNDRED)


def calculate_line_amounts(
    quantity: Number,
    unit_price: Number,
    tax_rate: Number,
    tax_included: bool = False,
) -> LineAmounts:
    """
    Compute amount, tax and total for a single line

    When tax_included is set the unit price is already gross, so no tax is
    added on top and total equals amount.

    Args:
        quantity: Number of units
        unit_price: Price per unit
        tax_rate: Tax rate in percent
        tax_included: Whether unit_price already includes tax

    Returns:
        LineAmounts with amount, tax_amount, total
    """
    amount = round_money(to_decimal(quantity) * to_decimal(unit_price))

    if tax_included:
        tax_amount = Decimal("0.00")
    else:
        tax_amount = calculate_tax(amount, tax_rate)

    return LineAmounts(
        amount=amount,
        tax_amount=tax_amount,
        total=amount + tax_amount,
    )


def calculate_invoice_totals(line_items: Iterable) -> InvoiceTotals:
    """
    Aggregate line items into invoice totals

    Soft-deleted lines are ignored. total_amount is always
    subtotal_amount + tax_amount.

    Args:
        line_items: Objects exposing amount, tax_amount and deleted_at

    Returns:
        InvoiceTotals
    """
    subtotal = Decimal("0.00")
    tax = Decimal("0.00")

    for item in line_items:
        if getattr(item, "deleted_at", None) is not None:
            continue
        subtotal += round_money(item.amount)
        tax += round_money(item.tax_amount)

    subtotal = round_money(subtotal)
    tax = round_money(tax)

    return InvoiceTotals(
        subtotal_amount=subtotal,
        tax_amount=tax,
        total_amount=subtotal + tax,
    )
