"""
Totals computation for quotations and orders.

subtotal = Σ quantity × unit_price × (days or 1)
tax      = round2(subtotal × IGV_RATE)
total    = subtotal + tax

Pure functions: inputs are never mutated and no currency conversion happens
here (currency is only a label on the document).
"""
from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping, Union

IGV_RATE = Decimal('0.18')
CENTS = Decimal('0.01')

Totals = namedtuple('Totals', ['subtotal', 'tax', 'total'])

Number = Union[int, float, Decimal, str]


def to_decimal(value: Number) -> Decimal:
    """Decimal from int/float/str without float artefacts (0.1 -> Decimal('0.1'))."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: Decimal) -> Decimal:
    """Round half-up to cents."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _field(item: Any, name: str):
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def line_amount(item: Any) -> Decimal:
    """
    Amount of a single line item (not rounded).

    Accepts mappings (request payloads) or objects with ``quantity``,
    ``unit_price`` and optional ``days`` attributes (ORM items).
    """
    quantity = to_decimal(_field(item, 'quantity') or 0)
    unit_price = to_decimal(_field(item, 'unit_price') or 0)
    days = _field(item, 'days') or 1
    return quantity * unit_price * to_decimal(days)


def compute_totals(items: Iterable[Any]) -> Totals:
    """
    Compute subtotal, IGV and total for a list of line items.

    An empty list yields zeros. Negative values are not rejected here;
    payload validation happens before this is called.
    """
    subtotal = round2(sum((line_amount(item) for item in items), Decimal('0')))
    tax = round2(subtotal * IGV_RATE)
    return Totals(subtotal=subtotal, tax=tax, total=subtotal + tax)


def convert_to_pen(amount: Number, currency: str, usd_rate: Number) -> Decimal:
    """Express an amount in PEN for dashboard aggregation (USD × fixed rate)."""
    value = to_decimal(amount or 0)
    if getattr(currency, 'value', currency) == 'USD':
        return value * to_decimal(usd_rate)
    return value
