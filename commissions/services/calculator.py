"""
Calcolatore delle commissioni.

Funzione pura dei quattro input (totale fattura, allocazioni per categoria,
configurazione delle categorie con le percentuali, percentuale del resto):
nessuno stato nascosto, nessun I/O. Può essere ricalcolata a ogni modifica.

Regole:
- commissione categoria = importo allocato * percentuale / 100
- resto = max(0, totale - somma allocazioni): le allocazioni oltre il totale
  non generano errore, il resto viene portato a zero
- commissione resto = resto * percentuale resto / 100
- commissione totale = commissione resto + somma commissioni categorie
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

_DIGITS_RE = re.compile(r"^\d+$")
HUNDRED = Decimal(100)


@dataclass(frozen=True)
class CategoryRate:
    """Voce della configurazione categorie vista dal calcolatore."""

    key: str
    name: str
    percentage: Decimal
    color: Optional[str] = None


@dataclass(frozen=True)
class BreakdownLine:
    key: str
    name: str
    amount: int
    percentage: Decimal
    commission: Decimal
    color: Optional[str] = None


@dataclass(frozen=True)
class CommissionBreakdown:
    total_amount: int
    lines: Tuple[BreakdownLine, ...]
    special_total: int
    rest_amount: int
    rest_percentage: Decimal
    rest_commission: Decimal
    total_commission: Decimal

    def to_dict(self) -> dict:
        return {
            "total_amount": self.total_amount,
            "breakdown": [
                {
                    "key": line.key,
                    "name": line.name,
                    "amount": line.amount,
                    "percentage": float(line.percentage),
                    "commission": float(line.commission),
                    "color": line.color,
                }
                for line in self.lines
            ],
            "special_total": self.special_total,
            "rest_amount": self.rest_amount,
            "rest_percentage": float(self.rest_percentage),
            "rest_commission": float(self.rest_commission),
            "total_commission": float(self.total_commission),
        }


def to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    # str() evita gli errori di rappresentazione binaria dei float
    return Decimal(str(value))


def commission_for(amount: Any, percentage: Any) -> Decimal:
    return to_decimal(amount) * to_decimal(percentage) / HUNDRED


def calculate_breakdown(
    total_amount: int,
    allocations: Mapping[str, int],
    categories: Sequence[CategoryRate],
    rest_percentage: Any,
) -> CommissionBreakdown:
    """Scomposizione delle commissioni, righe nell'ordine di ``categories``."""
    lines = []
    for category in categories:
        amount = int(allocations.get(category.key) or 0)
        lines.append(
            BreakdownLine(
                key=category.key,
                name=category.name,
                amount=amount,
                percentage=to_decimal(category.percentage),
                commission=commission_for(amount, category.percentage),
                color=category.color,
            )
        )

    special_total = sum(line.amount for line in lines)
    rest_amount = max(0, int(total_amount) - special_total)
    rest_pct = to_decimal(rest_percentage)
    rest_commission = commission_for(rest_amount, rest_pct)
    total_commission = rest_commission + sum(
        (line.commission for line in lines), Decimal(0)
    )

    return CommissionBreakdown(
        total_amount=int(total_amount),
        lines=tuple(lines),
        special_total=special_total,
        rest_amount=rest_amount,
        rest_percentage=rest_pct,
        rest_commission=rest_commission,
        total_commission=total_commission,
    )


def breakdown_from_lines(
    total_amount: int,
    lines: Iterable[Any],
    rest_percentage: Any,
) -> CommissionBreakdown:
    """
    Stessa formula per righe che portano già nome, importo e percentuale
    (modifica di una fattura salvata, percentuali congelate).
    """
    categories = []
    allocations = {}
    for index, line in enumerate(lines):
        key = str(index)
        categories.append(
            CategoryRate(key=key, name=line.name, percentage=to_decimal(line.percentage))
        )
        allocations[key] = int(line.amount or 0)
    return calculate_breakdown(total_amount, allocations, categories, rest_percentage)


def parse_amount(raw: Any) -> Optional[int]:
    """
    Importo intero inserito dall'utente; i separatori ',' vengono ignorati.
    Qualunque altro carattere rende l'input non valido (None).
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw >= 0 else None
    if isinstance(raw, float):
        return int(raw) if raw >= 0 and raw.is_integer() else None
    text = str(raw).replace(",", "").strip()
    if not _DIGITS_RE.match(text):
        return None
    return int(text)
