"""DTO e helper per i dati in ingresso di una fattura."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, List, Mapping, Optional

from commissions.services.calculator import parse_amount
from commissions.services.dto.ncf import build_ncf
from commissions.services.errors import ValidationError

PERCENTAGE_QUANT = Decimal("0.01")


def parse_percentage(value: Any) -> Optional[Decimal]:
    """Percentuale come Decimal a 2 decimali, None se non interpretabile."""
    if value in (None, ""):
        return None
    try:
        number = Decimal(str(value).replace(",", "."))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not number.is_finite():
        return None
    return number.quantize(PERCENTAGE_QUANT)


def validate_percentage(value: Any) -> Decimal:
    """Come parse_percentage ma obbligatoria e compresa tra 0 e 100."""
    number = parse_percentage(value)
    if number is None or number < 0 or number > 100:
        raise ValidationError("La percentuale deve essere un numero tra 0 e 100")
    return number


@dataclass
class InvoiceLineInput:
    name: str
    amount: int
    percentage: Decimal


@dataclass
class InvoiceInput:
    ncf: str
    invoice_date: Optional[date]
    total_amount: int
    lines: List[InvoiceLineInput] = field(default_factory=list)
    # None = usa la percentuale del resto corrente (impostazioni globali)
    rest_percentage: Optional[Decimal] = None
    seller_id: Optional[int] = None

    @staticmethod
    def _parse_date(value: Any) -> Optional[date]:
        if not value:
            return None
        if isinstance(value, date):
            return value
        try:
            return datetime.strptime(str(value), "%Y-%m-%d").date()
        except ValueError:
            return None

    @staticmethod
    def _parse_int(value: Any) -> Optional[int]:
        if value in (None, ""):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @classmethod
    def parse_lines(cls, raw_lines: Any) -> List[InvoiceLineInput]:
        """Righe nel formato [{name, amount, percentage}]; importi non validi valgono 0."""
        lines: List[InvoiceLineInput] = []
        if not isinstance(raw_lines, list):
            return lines
        for raw in raw_lines:
            if not isinstance(raw, Mapping):
                continue
            name = str(raw.get("name") or raw.get("product_name") or "").strip()
            if not name:
                continue
            lines.append(
                InvoiceLineInput(
                    name=name,
                    amount=parse_amount(raw.get("amount")) or 0,
                    percentage=validate_percentage(raw.get("percentage")),
                )
            )
        return lines

    @classmethod
    def from_payload(cls, data: Mapping[str, Any], *, ncf_prefix: str) -> "InvoiceInput":
        """
        Costruisce l'input da un payload JSON.

        L'NCF può arrivare completo ("ncf") oppure come solo suffisso
        ("ncf_suffix"), a cui viene anteposto il prefisso configurato.
        """
        ncf = str(data.get("ncf") or "").strip()
        if not ncf:
            ncf = build_ncf(data.get("ncf_suffix", ""), prefix=ncf_prefix)

        total_amount = parse_amount(data.get("total_amount"))
        if total_amount is None:
            raise ValidationError("Totale fattura mancante o non valido")

        rest_percentage = None
        if data.get("rest_percentage") not in (None, ""):
            rest_percentage = validate_percentage(data.get("rest_percentage"))

        return cls(
            ncf=ncf,
            invoice_date=cls._parse_date(data.get("invoice_date")),
            total_amount=total_amount,
            lines=cls.parse_lines(data.get("products")),
            rest_percentage=rest_percentage,
            seller_id=cls._parse_int(data.get("seller_id")),
        )
