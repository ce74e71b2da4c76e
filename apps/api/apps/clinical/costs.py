"""
Cost rollup shared by the live cost preview and the visit report ledger.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

HUNDRED = Decimal('100')
CENTS = Decimal('0.01')


def to_decimal(value):
    """Coerce money/rate inputs to Decimal; None counts as zero."""
    if value is None or value == '':
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 9.975 exact instead of their binary expansion
    return Decimal(str(value))


@dataclass(frozen=True)
class CostSummary:
    subtotal: Decimal
    provincial_tax: Decimal
    federal_tax: Decimal
    total: Decimal


def rollup(subtotal, provincial_rate, federal_rate) -> CostSummary:
    """
    Taxes and total for a subtotal. Rates are percentages.

    No rounding happens here; round only for display.
    """
    subtotal = to_decimal(subtotal)
    provincial_tax = subtotal * to_decimal(provincial_rate) / HUNDRED
    federal_tax = subtotal * to_decimal(federal_rate) / HUNDRED
    return CostSummary(
        subtotal=subtotal,
        provincial_tax=provincial_tax,
        federal_tax=federal_tax,
        total=subtotal + provincial_tax + federal_tax,
    )


def round_money(amount):
    return to_decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(amount):
    """'$114.98' for 114.975."""
    return f"${round_money(amount)}"


def format_number(value):
    """Number without trailing zeros: 9.975 -> '9.975', 5.000 -> '5'."""
    return format(to_decimal(value).normalize(), 'f')


def summary_lines(summary, provincial_label, provincial_rate, federal_label, federal_rate):
    """
    Display lines for a cost summary.

    A tax line is omitted when its rate is zero.
    """
    lines = [f"Subtotal: {format_money(summary.subtotal)}"]
    if to_decimal(provincial_rate) > 0:
        lines.append(
            f"{provincial_label} ({format_number(provincial_rate)}%): {format_money(summary.provincial_tax)}"
        )
    if to_decimal(federal_rate) > 0:
        lines.append(
            f"{federal_label} ({format_number(federal_rate)}%): {format_money(summary.federal_tax)}"
        )
    lines.append(f"Total: {format_money(summary.total)}")
    return lines
