"""
Display helpers in Brazilian style: R$ 1.234,56 and dd/mm/yyyy HH:MM.

Both are lenient: values the upstream sends in odd shapes format to a
neutral placeholder instead of failing the whole response.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

CURRENCY_SYMBOL = "R$"
EMPTY = "-"


def to_decimal(value) -> Decimal | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value))
        if not number.is_finite():
            return None
        # too many digits for the context precision raises here
        return number.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return None


def format_currency(value) -> str:
    """1234.5 → 'R$ 1.234,50'"""
    amount = to_decimal(value)
    if amount is None:
        amount = Decimal("0.00")
    us_str = f"{abs(amount):,.2f}"
    integer_part, decimal_part = us_str.split(".")
    integer_brl = integer_part.replace(",", ".")
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL} {integer_brl},{decimal_part}"


def format_datetime(value) -> str:
    """ISO timestamp → 'dd/mm/yyyy HH:MM' in the console's time zone."""
    if value in (None, ""):
        return EMPTY

    if isinstance(value, str):
        try:
            day = parse_date(value)
            parsed = None if day else parse_datetime(value.replace("Z", "+00:00"))
        except ValueError:
            # well formed but impossible, e.g. 2025-02-30
            return value
        if day is not None:
            return day.strftime("%d/%m/%Y")
        if parsed is None:
            return value
        value = parsed

    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.strftime("%d/%m/%Y %H:%M")
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    return str(value)
