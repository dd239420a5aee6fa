from types import SimpleNamespace

import pytest

from commissions.services.dto.invoice_input import InvoiceInput
from commissions.services.errors import NotFoundError, ValidationError
from commissions.services.invoice_service import create_invoice, get_invoice
from commissions.services.seller_service import (
    create_seller,
    delete_seller,
    get_selected_seller,
    list_sellers,
    resolve_selected_seller,
    select_seller,
    update_seller,
)


def _seller(seller_id, active=True):
    return SimpleNamespace(id=seller_id, is_active=active)


def test_resolve_prefers_explicit_selection():
    sellers = [_seller(1), _seller(2)]
    assert resolve_selected_seller(sellers, 2).id == 2


def test_resolve_falls_back_to_first_active():
    sellers = [_seller(1, active=False), _seller(2), _seller(3)]
    assert resolve_selected_seller(sellers, 99).id == 2
    assert resolve_selected_seller([_seller(1, active=False)], None) is None


def test_default_seller_is_bootstrapped(app, request_ctx):
    sellers = list_sellers()

    assert len(sellers) == 1
    assert sellers[0].name == app.config["DEFAULT_SELLER_NAME"]
    assert len(list_sellers()) == 1


def test_sellers_ordered_by_creation(app, request_ctx):
    first = create_seller("Anna")
    second = create_seller("Bruno")

    assert [s.id for s in list_sellers()] == [first.id, second.id]


def test_first_created_seller_becomes_selected(app, request_ctx):
    seller = create_seller("Anna")
    create_seller("Bruno")

    assert get_selected_seller().id == seller.id


def test_new_seller_does_not_replace_implicit_selection(app, request_ctx):
    default = list_sellers()[0]
    assert get_selected_seller().id == default.id

    create_seller("Secondo")

    assert get_selected_seller().id == default.id


def test_new_seller_selected_when_only_inactive_exist(app, request_ctx):
    inactive = create_seller("Anna")
    update_seller(inactive.id, is_active=False)
    select_seller(None)
    assert get_selected_seller() is None

    bruno = create_seller("Bruno")

    assert get_selected_seller().id == bruno.id


def test_select_unknown_seller(app, request_ctx):
    create_seller("Anna")
    with pytest.raises(NotFoundError):
        select_seller(999)


def test_deleting_selected_seller_falls_back(app, request_ctx):
    anna = create_seller("Anna")
    bruno = create_seller("Bruno")
    select_seller(anna.id)

    selected = delete_seller(anna.id)

    assert selected.id == bruno.id
    assert get_selected_seller().id == bruno.id


def test_deleting_seller_keeps_invoices(app, request_ctx):
    anna = create_seller("Anna")
    invoice = create_invoice(
        InvoiceInput(ncf="B010000001", invoice_date=None, total_amount=100, seller_id=anna.id)
    )

    delete_seller(anna.id)

    assert get_invoice(invoice.id).seller_id is None


def test_update_seller_and_validation(app, request_ctx):
    seller = create_seller("Anna")

    updated = update_seller(seller.id, name="Anna Rossi", is_active=False)
    assert updated.name == "Anna Rossi"
    assert updated.is_active is False

    with pytest.raises(ValidationError):
        create_seller("   ")
    with pytest.raises(NotFoundError):
        update_seller(999, name="X")
