from datetime import date, datetime
from decimal import Decimal

from commissions.services.aggregation_service import (
    build_monthly_breakdown,
    build_monthly_summary,
    filter_invoices_by_month,
    list_available_months,
)
from commissions.services.dto.month import Month

MARCH = Month(2024, 3)


def test_month_boundary_separates_invoices(invoice_factory):
    last_instant = invoice_factory(
        "B010000001", 100, created_at=datetime(2024, 3, 31, 23, 59, 59)
    )
    first_instant = invoice_factory(
        "B010000002", 100, created_at=datetime(2024, 4, 1, 0, 0, 0)
    )

    assert filter_invoices_by_month([last_instant, first_instant], MARCH) == [last_instant]
    assert filter_invoices_by_month([last_instant, first_instant], Month(2024, 4)) == [
        first_instant
    ]


def test_invoice_date_takes_precedence_over_creation(invoice_factory):
    invoice = invoice_factory(
        "B010000001",
        100,
        invoice_date=date(2024, 2, 28),
        created_at=datetime(2024, 3, 2, 9, 0),
    )
    assert filter_invoices_by_month([invoice], MARCH) == []
    assert filter_invoices_by_month([invoice], Month(2024, 2)) == [invoice]


def test_breakdown_groups_and_sorts_by_amount(invoice_factory):
    invoices = [
        invoice_factory(
            "B010000001",
            1000,
            products=[("Elettronica", 300, 10), ("Ricambi", 200, 20)],
            rest_amount=500,
            invoice_date=date(2024, 3, 5),
        ),
        invoice_factory(
            "B010000002",
            600,
            products=[("Ricambi", 400, 20), ("Vuoto", 0, 5)],
            rest_amount=200,
            invoice_date=date(2024, 3, 6),
        ),
    ]

    breakdown = build_monthly_breakdown(invoices, MARCH)

    assert [g.name for g in breakdown.groups] == ["Ricambi", "Elettronica"]
    ricambi = breakdown.groups[0]
    assert ricambi.total_amount == 600
    assert ricambi.total_commission == Decimal(120)
    assert [e.ncf for e in ricambi.entries] == ["B010000001", "B010000002"]

    assert breakdown.rest.total_amount == 700
    assert breakdown.rest.percentage == Decimal(25)
    assert breakdown.grand_total_commission == Decimal(30) + Decimal(120) + Decimal(175)
    assert breakdown.invoice_count == 2
    assert breakdown.distinct_ncf_count == 2


def test_rest_group_excludes_fully_allocated_invoices(invoice_factory):
    invoices = [
        invoice_factory("B010000001", 500, products=[("Servizi", 500, 15)], rest_amount=0),
        invoice_factory("B010000002", 100, rest_amount=100),
    ]
    for inv in invoices:
        inv.invoice_date = date(2024, 3, 10)

    breakdown = build_monthly_breakdown(invoices, MARCH)

    assert [e.ncf for e in breakdown.rest.entries] == ["B010000002"]


def test_rest_percentage_is_none_for_mixed_rates(invoice_factory):
    invoices = [
        invoice_factory("B010000001", 100, rest_amount=100, rest_percentage="25",
                        invoice_date=date(2024, 3, 1)),
        invoice_factory("B010000002", 100, rest_amount=100, rest_percentage="30",
                        invoice_date=date(2024, 3, 2)),
    ]
    assert build_monthly_breakdown(invoices, MARCH).rest.percentage is None


def test_renamed_category_forms_separate_group(invoice_factory):
    invoices = [
        invoice_factory("B010000001", 100, products=[("Ricambi", 100, 20)],
                        invoice_date=date(2024, 3, 1)),
        invoice_factory("B010000002", 100, products=[("Ricambi auto", 100, 20)],
                        invoice_date=date(2024, 3, 2)),
    ]
    names = {g.name for g in build_monthly_breakdown(invoices, MARCH).groups}
    assert names == {"Ricambi", "Ricambi auto"}


def test_empty_month_breakdown(invoice_factory):
    breakdown = build_monthly_breakdown([], MARCH)
    assert breakdown.groups == []
    assert breakdown.rest.entries == []
    assert breakdown.grand_total_commission == 0


def test_summary_rows_and_listing(invoice_factory):
    invoices = [
        invoice_factory(
            "B010000001",
            1000,
            products=[("Elettronica", 300, 10), ("Ricambi", 200, 20)],
            rest_amount=500,
            invoice_date=date(2024, 3, 5),
        ),
        invoice_factory(
            "B010000002",
            400,
            products=[("Elettronica", 400, 10)],
            invoice_date=date(2024, 3, 9),
        ),
    ]

    summary = build_monthly_summary(invoices, MARCH)

    assert summary.invoice_count == 2
    assert summary.total_sales == 1400
    assert summary.total_commission == Decimal(195) + Decimal(40)
    assert [r.name for r in summary.category_rows] == ["Elettronica", "Ricambi"]
    assert summary.category_rows[0].invoice_count == 2
    assert summary.rest_row is not None
    assert summary.rest_row.invoice_count == 1
    assert summary.rest_row.total_commission == Decimal(125)
    assert [r.position for r in summary.invoice_rows] == [1, 2]


def test_summary_without_rest_commission(invoice_factory):
    invoices = [
        invoice_factory("B010000001", 500, products=[("Servizi", 500, 15)],
                        invoice_date=date(2024, 3, 1)),
    ]
    assert build_monthly_summary(invoices, MARCH).rest_row is None


def test_available_months_include_recent_and_historic(invoice_factory, today):
    old = invoice_factory("B010000001", 100, invoice_date=date(2023, 7, 4))

    months = list_available_months([old], today, recent=4)

    assert [m.key for m in months] == [
        "2024-03",
        "2024-02",
        "2024-01",
        "2023-12",
        "2023-07",
    ]
