"""
Helper per la formattazione numerica centralizzata.

Formattazione fissa (separatore delle migliaia ',' e decimale '.'), usata sia
dall'API sia dai report PDF.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any


def format_number(value: Any, decimals: int = 2, use_grouping: bool = True) -> str:
    if value in (None, ""):
        return ""
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return str(value)
    if not number.is_finite():
        return str(value)

    if decimals < 0:
        decimals = 0

    quant = Decimal("1") if decimals == 0 else Decimal("1").scaleb(-decimals)
    number = number.quantize(quant, rounding=ROUND_HALF_UP)

    format_spec = f",.{decimals}f" if use_grouping else f".{decimals}f"
    return format(number, format_spec)


def format_int(value: Any, use_grouping: bool = True) -> str:
    """Intero raggruppato, es. 1,000."""
    return format_number(value, decimals=0, use_grouping=use_grouping)


def format_currency(value: Any, use_grouping: bool = True) -> str:
    """Importo con 2 decimali fissi, es. 1,234.50."""
    return format_number(value, decimals=2, use_grouping=use_grouping)


def format_percentage(value: Any) -> str:
    if value in (None, ""):
        return ""
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return str(value)
    if number == number.to_integral_value():
        return f"{number.quantize(Decimal('1'))}%"
    return f"{number.normalize():f}%"
