from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from commissions.extensions import db
from commissions.models import InvoiceProduct
from commissions.services.category_service import create_category, update_category
from commissions.services.dto.invoice_input import InvoiceInput, InvoiceLineInput
from commissions.services.dto.month import Month
from commissions.services.errors import (
    DuplicateNcfError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from commissions.services.invoice_service import (
    create_invoice,
    delete_invoice,
    get_invoice,
    lines_from_allocations,
    list_invoices,
    update_invoice,
)
from commissions.services.settings_service import (
    get_last_ncf_number,
    get_next_ncf_suffix,
    set_rest_percentage,
)


def _input(ncf="B010000001", total=1000, lines=None, **kwargs):
    if lines is None:
        lines = [
            InvoiceLineInput(name="Elettronica", amount=300, percentage=Decimal("10")),
            InvoiceLineInput(name="Ricambi", amount=200, percentage=Decimal("20")),
        ]
    return InvoiceInput(ncf=ncf, invoice_date=kwargs.pop("invoice_date", None),
                        total_amount=total, lines=lines, **kwargs)


def test_create_computes_derived_fields(app):
    invoice = create_invoice(_input())

    assert invoice.rest_amount == 500
    assert invoice.rest_percentage == Decimal(25)
    assert invoice.rest_commission == Decimal(125)
    assert invoice.total_commission == Decimal(195)
    assert [p.commission for p in invoice.products] == [Decimal(30), Decimal(40)]


def test_zero_amount_lines_are_not_stored(app):
    lines = [
        InvoiceLineInput(name="Elettronica", amount=0, percentage=Decimal("10")),
        InvoiceLineInput(name="Ricambi", amount=100, percentage=Decimal("20")),
    ]
    invoice = create_invoice(_input(lines=lines))
    assert [p.product_name for p in invoice.products] == ["Ricambi"]


def test_duplicate_ncf_is_rejected_without_writing(app):
    create_invoice(_input())

    with pytest.raises(DuplicateNcfError) as exc_info:
        create_invoice(_input(total=50, lines=[]))

    assert exc_info.value.code == "DUPLICATE_NCF"
    assert len(list_invoices()) == 1
    assert db.session.query(InvoiceProduct).count() == 2


def test_update_with_own_ncf_succeeds(app):
    invoice = create_invoice(_input())

    updated = update_invoice(invoice.id, _input(total=2000))

    assert updated.ncf == "B010000001"
    assert updated.rest_amount == 1500


def test_update_with_other_invoice_ncf_fails(app):
    create_invoice(_input(ncf="B010000001"))
    second = create_invoice(_input(ncf="B010000002"))

    with pytest.raises(DuplicateNcfError):
        update_invoice(second.id, _input(ncf="B010000001"))

    assert get_invoice(second.id).ncf == "B010000002"


def test_update_replaces_lines_and_keeps_rest_percentage(app):
    invoice = create_invoice(_input())
    set_rest_percentage("30")

    lines = [InvoiceLineInput(name="Servizi", amount=100, percentage=Decimal("15"))]
    updated = update_invoice(invoice.id, _input(total=100, lines=lines))

    assert [p.product_name for p in updated.products] == ["Servizi"]
    assert updated.rest_percentage == Decimal(25)
    assert db.session.query(InvoiceProduct).count() == 1


def test_update_missing_invoice(app):
    with pytest.raises(NotFoundError):
        update_invoice(999, _input())


def test_delete_cascades_to_lines(app):
    invoice = create_invoice(_input())

    assert delete_invoice(invoice.id) is True
    assert list_invoices() == []
    assert db.session.query(InvoiceProduct).count() == 0

    with pytest.raises(NotFoundError):
        delete_invoice(invoice.id)


def test_saved_then_listed_round_trip(app):
    created = create_invoice(_input(invoice_date=date(2024, 3, 15)))

    listed = list_invoices()[0]

    assert listed.id == created.id
    assert listed.ncf == "B010000001"
    assert listed.invoice_date == date(2024, 3, 15)
    assert listed.total_amount == 1000
    assert [(p.product_name, p.amount, p.percentage) for p in listed.products] == [
        ("Elettronica", 300, Decimal(10)),
        ("Ricambi", 200, Decimal(20)),
    ]


def test_list_is_newest_first_and_filters_month(app):
    create_invoice(_input(ncf="B010000001", invoice_date=date(2024, 2, 10)))
    create_invoice(_input(ncf="B010000002", invoice_date=date(2024, 3, 10)))

    assert [i.ncf for i in list_invoices()] == ["B010000002", "B010000001"]
    assert [i.ncf for i in list_invoices(month=Month(2024, 2))] == ["B010000001"]


def test_saved_percentages_do_not_follow_category_changes(app):
    category = create_category("Elettronica", "10")
    invoice = create_invoice(_input(lines=lines_from_allocations({str(category.id): 300})))

    update_category(category.id, percentage="50", name="Elettronica nuova")

    stored = get_invoice(invoice.id).products[0]
    assert stored.product_name == "Elettronica"
    assert stored.percentage == Decimal(10)
    assert stored.commission == Decimal(30)


def test_next_ncf_suggestion_follows_last_saved(app):
    assert get_next_ncf_suffix() == "0001"
    create_invoice(_input(ncf="B010000041"))
    assert get_next_ncf_suffix() == "0042"


def test_negative_total_is_rejected(app):
    with pytest.raises(ValidationError):
        create_invoice(_input(total=-1))


def _failing_commit(monkeypatch):
    def commit():
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    monkeypatch.setattr(db.session, "commit", commit)


def test_storage_error_on_create_leaves_no_partial_state(app, monkeypatch):
    _failing_commit(monkeypatch)

    with pytest.raises(StorageError) as exc_info:
        create_invoice(_input(ncf="B010000041"))

    monkeypatch.undo()
    assert exc_info.value.code == "STORAGE_ERROR"
    assert list_invoices() == []
    assert db.session.query(InvoiceProduct).count() == 0
    assert get_last_ncf_number() == 0


def test_storage_error_on_update_keeps_previous_invoice(app, monkeypatch):
    invoice = create_invoice(_input())
    _failing_commit(monkeypatch)

    lines = [InvoiceLineInput(name="Servizi", amount=100, percentage=Decimal("15"))]
    with pytest.raises(StorageError):
        update_invoice(invoice.id, _input(ncf="B010000009", total=100, lines=lines))

    monkeypatch.undo()
    stored = get_invoice(invoice.id)
    assert stored.ncf == "B010000001"
    assert stored.total_amount == 1000
    assert [p.product_name for p in stored.products] == ["Elettronica", "Ricambi"]
    assert db.session.query(InvoiceProduct).count() == 2
