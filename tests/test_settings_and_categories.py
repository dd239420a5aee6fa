from decimal import Decimal

import pytest

from commissions.services.category_service import (
    category_rates,
    create_category,
    delete_category,
    list_categories,
    update_category,
)
from commissions.services.errors import NotFoundError, ValidationError
from commissions.services.settings_service import (
    get_last_ncf_number,
    get_rest_percentage,
    set_last_ncf_number,
    set_rest_percentage,
)


def test_rest_percentage_defaults_to_config(app):
    assert get_rest_percentage() == Decimal(25)


def test_rest_percentage_is_persisted(app):
    assert set_rest_percentage("12.5") == Decimal("12.50")
    assert get_rest_percentage() == Decimal("12.5")


@pytest.mark.parametrize("value", ["-1", "101", "abc", None])
def test_rest_percentage_out_of_range(app, value):
    with pytest.raises(ValidationError):
        set_rest_percentage(value)


def test_last_ncf_number(app):
    assert get_last_ncf_number() == 0
    set_last_ncf_number(17)
    assert get_last_ncf_number() == 17


def test_categories_keep_insertion_order(app):
    first = create_category("Elettronica", "10", color="#ff0000")
    second = create_category("Ricambi", 20)

    categories = list_categories()
    assert [c.id for c in categories] == [first.id, second.id]
    assert categories[1].color == "#6b7280"

    rates = category_rates(categories)
    assert rates[0].key == str(first.id)
    assert rates[1].percentage == Decimal(20)


def test_category_update_and_delete(app):
    category = create_category("Elettronica", "10")

    updated = update_category(category.id, name="Elettronica+", percentage="15")
    assert updated.name == "Elettronica+"
    assert updated.percentage == Decimal(15)

    assert delete_category(category.id) is True
    assert list_categories() == []
    with pytest.raises(NotFoundError):
        delete_category(category.id)


def test_category_validation(app):
    with pytest.raises(ValidationError):
        create_category("", "10")
    with pytest.raises(ValidationError):
        create_category("Ricambi", "150")
