"""
Aggregazioni mensili sulle fatture salvate (desglose e riepilogo).

Funzioni pure: lavorano su collezioni già caricate in memoria (modelli
Invoice o oggetti con gli stessi attributi) e non eseguono query.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from commissions.services.calculator import to_decimal
from commissions.services.dto.month import Month


@dataclass
class BreakdownEntry:
    ncf: str
    date: Optional[date]
    amount: int

    def to_dict(self) -> dict:
        return {
            "ncf": self.ncf,
            "date": self.date.isoformat() if self.date else None,
            "amount": self.amount,
        }


@dataclass
class CategoryGroup:
    name: str
    percentage: Optional[Decimal]
    entries: List[BreakdownEntry] = field(default_factory=list)
    total_amount: int = 0
    total_commission: Decimal = Decimal(0)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "percentage": _float_or_none(self.percentage),
            "entries": [entry.to_dict() for entry in self.entries],
            "total_amount": self.total_amount,
            "total_commission": float(self.total_commission),
        }


@dataclass
class MonthlyBreakdown:
    month: Month
    groups: List[CategoryGroup]
    rest: CategoryGroup
    grand_total_commission: Decimal
    invoice_count: int

    @property
    def distinct_ncf_count(self) -> int:
        ncfs = {entry.ncf for group in self.groups for entry in group.entries}
        ncfs.update(entry.ncf for entry in self.rest.entries)
        return len(ncfs)

    def to_dict(self) -> dict:
        return {
            "month": self.month.key,
            "label": self.month.label,
            "groups": [group.to_dict() for group in self.groups],
            "rest": self.rest.to_dict(),
            "grand_total_commission": float(self.grand_total_commission),
            "invoice_count": self.invoice_count,
        }


@dataclass
class CategorySummaryRow:
    name: str
    percentage: Optional[Decimal]
    invoice_count: int
    total_amount: int
    total_commission: Decimal

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "percentage": _float_or_none(self.percentage),
            "invoice_count": self.invoice_count,
            "total_amount": self.total_amount,
            "total_commission": float(self.total_commission),
        }


@dataclass
class InvoiceSummaryRow:
    position: int
    ncf: str
    date: Optional[date]
    total_amount: int
    total_commission: Decimal

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "ncf": self.ncf,
            "date": self.date.isoformat() if self.date else None,
            "total_amount": self.total_amount,
            "total_commission": float(self.total_commission),
        }


@dataclass
class MonthlySummary:
    month: Month
    invoice_count: int
    total_sales: int
    total_commission: Decimal
    category_rows: List[CategorySummaryRow]
    rest_row: Optional[CategorySummaryRow]
    invoice_rows: List[InvoiceSummaryRow]

    def to_dict(self) -> dict:
        return {
            "month": self.month.key,
            "label": self.month.label,
            "invoice_count": self.invoice_count,
            "total_sales": self.total_sales,
            "total_commission": float(self.total_commission),
            "category_rows": [row.to_dict() for row in self.category_rows],
            "rest_row": self.rest_row.to_dict() if self.rest_row else None,
            "invoice_rows": [row.to_dict() for row in self.invoice_rows],
        }


def _float_or_none(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def effective_date(invoice: Any) -> Optional[date]:
    """Data fattura se presente, altrimenti giorno di creazione."""
    invoice_date = getattr(invoice, "invoice_date", None)
    if invoice_date is not None:
        return invoice_date
    created_at = getattr(invoice, "created_at", None)
    return created_at.date() if created_at is not None else None


def filter_invoices_by_month(invoices: Iterable[Any], month: Month) -> List[Any]:
    """Fatture con data effettiva tra il primo e l'ultimo istante del mese (inclusi)."""
    return [inv for inv in invoices if month.contains(effective_date(inv))]


def _common_rest_percentage(invoices: Iterable[Any]) -> Optional[Decimal]:
    rates = {to_decimal(inv.rest_percentage) for inv in invoices}
    return rates.pop() if len(rates) == 1 else None


def build_monthly_breakdown(invoices: Iterable[Any], month: Month) -> MonthlyBreakdown:
    """
    Raggruppa le righe delle fatture del mese per nome categoria.

    Il raggruppamento è per nome (congelato sulla riga), non per id: una
    categoria rinominata produce un gruppo distinto per le fatture vecchie.
    """
    filtered = filter_invoices_by_month(invoices, month)

    groups: Dict[str, CategoryGroup] = {}
    for invoice in filtered:
        inv_date = effective_date(invoice)
        for product in invoice.products or []:
            amount = int(product.amount or 0)
            if amount <= 0:
                continue
            group = groups.get(product.product_name)
            if group is None:
                group = CategoryGroup(
                    name=product.product_name,
                    percentage=to_decimal(product.percentage),
                )
                groups[product.product_name] = group
            group.entries.append(BreakdownEntry(ncf=invoice.ncf, date=inv_date, amount=amount))
            group.total_amount += amount
            group.total_commission += to_decimal(product.commission)

    rest_invoices = [inv for inv in filtered if int(inv.rest_amount or 0) > 0]
    rest = CategoryGroup(name="Resto dei prodotti", percentage=_common_rest_percentage(rest_invoices))
    for invoice in rest_invoices:
        amount = int(invoice.rest_amount)
        rest.entries.append(
            BreakdownEntry(ncf=invoice.ncf, date=effective_date(invoice), amount=amount)
        )
        rest.total_amount += amount
        rest.total_commission += to_decimal(invoice.rest_commission)

    # sorted() è stabile: a parità di importo resta l'ordine di apparizione
    ordered = sorted(groups.values(), key=lambda g: g.total_amount, reverse=True)
    grand_total = sum((g.total_commission for g in ordered), Decimal(0)) + rest.total_commission

    return MonthlyBreakdown(
        month=month,
        groups=ordered,
        rest=rest,
        grand_total_commission=grand_total,
        invoice_count=len(filtered),
    )


def build_monthly_summary(invoices: Iterable[Any], month: Month) -> MonthlySummary:
    """Dati del report di riepilogo mensile: card, tabella categorie, elenco fatture."""
    filtered = filter_invoices_by_month(invoices, month)

    rows: Dict[str, CategorySummaryRow] = {}
    invoice_ids_by_name: Dict[str, set] = {}
    for index, invoice in enumerate(filtered):
        for product in invoice.products or []:
            amount = int(product.amount or 0)
            if amount <= 0:
                continue
            row = rows.get(product.product_name)
            if row is None:
                row = CategorySummaryRow(
                    name=product.product_name,
                    percentage=to_decimal(product.percentage),
                    invoice_count=0,
                    total_amount=0,
                    total_commission=Decimal(0),
                )
                rows[product.product_name] = row
                invoice_ids_by_name[product.product_name] = set()
            row.total_amount += amount
            row.total_commission += to_decimal(product.commission)
            invoice_ids_by_name[product.product_name].add(index)

    for name, row in rows.items():
        row.invoice_count = len(invoice_ids_by_name[name])

    category_rows = sorted(rows.values(), key=lambda r: r.total_commission, reverse=True)

    rest_row = None
    rest_commission = sum((to_decimal(inv.rest_commission) for inv in filtered), Decimal(0))
    if rest_commission > 0:
        rest_invoices = [inv for inv in filtered if int(inv.rest_amount or 0) > 0]
        rest_row = CategorySummaryRow(
            name="Resto dei prodotti",
            percentage=_common_rest_percentage(rest_invoices),
            invoice_count=len(rest_invoices),
            total_amount=sum(int(inv.rest_amount or 0) for inv in filtered),
            total_commission=rest_commission,
        )

    invoice_rows = [
        InvoiceSummaryRow(
            position=position,
            ncf=invoice.ncf,
            date=effective_date(invoice),
            total_amount=int(invoice.total_amount or 0),
            total_commission=to_decimal(invoice.total_commission),
        )
        for position, invoice in enumerate(filtered, start=1)
    ]

    return MonthlySummary(
        month=month,
        invoice_count=len(filtered),
        total_sales=sum(int(inv.total_amount or 0) for inv in filtered),
        total_commission=sum((to_decimal(inv.total_commission) for inv in filtered), Decimal(0)),
        category_rows=category_rows,
        rest_row=rest_row,
        invoice_rows=invoice_rows,
    )


def list_available_months(invoices: Iterable[Any], today: date, recent: int = 4) -> List[Month]:
    """Ultimi ``recent`` mesi (corrente incluso) più i mesi con fatture, dal più recente."""
    current = Month.from_date(today)
    months = {current.shift(-offset) for offset in range(max(recent, 0))}
    for invoice in invoices:
        inv_date = effective_date(invoice)
        if inv_date is not None:
            months.add(Month.from_date(inv_date))
    return sorted(months, reverse=True)
