from datetime import date
from decimal import Decimal

from commissions.services.dto.month import Month
from commissions.services.statistics_service import (
    build_trend,
    compare_with_previous_month,
    compute_month_totals,
    percent_change,
)


def test_month_totals_and_average(invoice_factory):
    invoices = [
        invoice_factory("B010000001", 1000, rest_amount=1000, invoice_date=date(2024, 3, 1)),
        invoice_factory("B010000002", 200, rest_amount=200, invoice_date=date(2024, 3, 2)),
    ]
    totals = compute_month_totals(invoices, Month(2024, 3))

    assert totals.invoice_count == 2
    assert totals.total_sales == 1200
    assert totals.total_commission == Decimal(300)
    assert totals.average_commission == Decimal(150)


def test_empty_month_average_is_zero():
    assert compute_month_totals([], Month(2024, 3)).average_commission == 0


def test_percent_change_without_previous_data_is_none():
    assert percent_change(100, 0) is None
    assert percent_change(150, 100) == 50.0
    assert percent_change(0, 100) == -100.0


def test_comparison_with_empty_previous_month(invoice_factory):
    invoices = [
        invoice_factory("B010000001", 1000, rest_amount=1000, invoice_date=date(2024, 3, 1)),
    ]
    comparison = compare_with_previous_month(invoices, Month(2024, 3))

    assert comparison.previous.invoice_count == 0
    assert comparison.sales_change is None
    assert comparison.commission_change is None
    assert comparison.to_dict()["invoice_count_change"] is None


def test_comparison_across_year_boundary(invoice_factory):
    invoices = [
        invoice_factory("B010000001", 100, rest_amount=100, invoice_date=date(2023, 12, 20)),
        invoice_factory("B010000002", 300, rest_amount=300, invoice_date=date(2024, 1, 5)),
    ]
    comparison = compare_with_previous_month(invoices, Month(2024, 1))
    assert comparison.sales_change == 200.0


def test_trend_is_oldest_first_and_zero_filled(invoice_factory):
    invoices = [
        invoice_factory("B010000001", 100, rest_amount=100, invoice_date=date(2024, 1, 10)),
        invoice_factory("B010000002", 200, rest_amount=200, invoice_date=date(2024, 3, 10)),
    ]
    trend = build_trend(invoices, Month(2024, 3), size=6)

    assert [p.month.key for p in trend] == [
        "2023-10",
        "2023-11",
        "2023-12",
        "2024-01",
        "2024-02",
        "2024-03",
    ]
    assert [p.total_sales for p in trend] == [0, 0, 0, 100, 0, 200]
    assert trend[-1].to_dict()["label"] == "Mar"
