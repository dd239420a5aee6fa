"""
Statistiche mensili: totali del mese, confronto con il mese precedente e
andamento degli ultimi mesi.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from commissions.services.aggregation_service import filter_invoices_by_month
from commissions.services.calculator import to_decimal
from commissions.services.dto.month import Month


@dataclass
class MonthTotals:
    month: Month
    invoice_count: int
    total_sales: int
    total_commission: Decimal
    average_commission: Decimal

    def to_dict(self) -> dict:
        return {
            "month": self.month.key,
            "label": self.month.label,
            "invoice_count": self.invoice_count,
            "total_sales": self.total_sales,
            "total_commission": float(self.total_commission),
            "average_commission": float(self.average_commission),
        }


@dataclass
class MonthComparison:
    current: MonthTotals
    previous: MonthTotals
    # None = nessun dato nel mese precedente (diverso da 0%)
    sales_change: Optional[float]
    commission_change: Optional[float]
    invoice_count_change: Optional[float]

    def to_dict(self) -> dict:
        return {
            "current": self.current.to_dict(),
            "previous": self.previous.to_dict(),
            "sales_change": self.sales_change,
            "commission_change": self.commission_change,
            "invoice_count_change": self.invoice_count_change,
        }


@dataclass
class TrendPoint:
    month: Month
    invoice_count: int
    total_sales: int
    total_commission: Decimal

    def to_dict(self) -> dict:
        return {
            "month": self.month.key,
            "label": self.month.short_label,
            "invoice_count": self.invoice_count,
            "total_sales": self.total_sales,
            "total_commission": float(self.total_commission),
        }


def compute_month_totals(invoices: Iterable[Any], month: Month) -> MonthTotals:
    monthly = filter_invoices_by_month(invoices, month)
    count = len(monthly)
    total_commission = sum((to_decimal(inv.total_commission) for inv in monthly), Decimal(0))
    return MonthTotals(
        month=month,
        invoice_count=count,
        total_sales=sum(int(inv.total_amount or 0) for inv in monthly),
        total_commission=total_commission,
        average_commission=total_commission / count if count else Decimal(0),
    )


def percent_change(current: Any, previous: Any) -> Optional[float]:
    """(corrente - precedente) / precedente * 100; None se il precedente è zero."""
    prev = to_decimal(previous)
    if prev == 0:
        return None
    return float((to_decimal(current) - prev) / prev * 100)


def compare_with_previous_month(invoices: Iterable[Any], month: Month) -> MonthComparison:
    invoices = list(invoices)
    current = compute_month_totals(invoices, month)
    previous = compute_month_totals(invoices, month.previous())
    return MonthComparison(
        current=current,
        previous=previous,
        sales_change=percent_change(current.total_sales, previous.total_sales),
        commission_change=percent_change(current.total_commission, previous.total_commission),
        invoice_count_change=percent_change(current.invoice_count, previous.invoice_count),
    )


def build_trend(invoices: Iterable[Any], month: Month, size: int = 6) -> List[TrendPoint]:
    """``size`` mesi consecutivi che terminano con ``month``, dal più vecchio; mesi vuoti a zero."""
    invoices = list(invoices)
    points = []
    for offset in range(size - 1, -1, -1):
        totals = compute_month_totals(invoices, month.shift(-offset))
        points.append(
            TrendPoint(
                month=totals.month,
                invoice_count=totals.invoice_count,
                total_sales=totals.total_sales,
                total_commission=totals.total_commission,
            )
        )
    return points
