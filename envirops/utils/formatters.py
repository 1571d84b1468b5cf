"""
Formatting helpers for JSON payloads and printed documents.
Money is printed Peruvian style: S/ 1,234.56 or US$ 1,234.56.
"""
from decimal import Decimal, InvalidOperation
from datetime import date, datetime
from typing import Union, Optional

CURRENCY_SYMBOLS = {
    'PEN': 'S/',
    'USD': 'US$',
}


def as_float(value: Union[int, float, Decimal, str, None]) -> Optional[float]:
    """Convert a numeric column value to float for JSON output (None stays None)."""
    if value is None:
        return None
    return float(value)


def as_iso(value: Union[date, datetime, None]) -> Optional[str]:
    """ISO-8601 string for dates and datetimes (None stays None)."""
    if value is None:
        return None
    return value.isoformat()


def money_pe(value: Union[int, float, Decimal, str, None], currency: str = 'PEN') -> str:
    """
    Format an amount with thousands separator and two decimals.

    Examples:
        money_pe(1500) -> "S/ 1,500.00"
        money_pe(Decimal('708'), 'USD') -> "US$ 708.00"
        money_pe(None) -> "-"
    """
    if value is None or value == "":
        return "-"
    try:
        num = Decimal(str(value)).quantize(Decimal('0.01'))
    except (InvalidOperation, ValueError, TypeError):
        return "-"

    code = getattr(currency, 'value', currency)
    symbol = CURRENCY_SYMBOLS.get(code, code)
    return f"{symbol} {num:,.2f}"


def qty_pe(value: Union[int, float, Decimal, None]) -> str:
    """Quantity without trailing zeros: 2 -> '2', 2.5 -> '2.5'."""
    if value is None:
        return "-"
    num = Decimal(str(value))
    if num == num.to_integral_value():
        return str(int(num))
    return f"{num.normalize():f}"


def date_pe(value: Union[date, datetime, None]) -> str:
    """Date as dd/mm/YYYY."""
    if value is None:
        return "-"
    return value.strftime('%d/%m/%Y')
