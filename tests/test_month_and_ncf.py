from datetime import date, datetime

import pytest

from commissions.services.dto.month import Month
from commissions.services.dto.ncf import build_ncf, ncf_suffix_number, next_ncf_suffix
from commissions.services.errors import ValidationError


def test_month_bounds_are_inclusive():
    march = Month(2024, 3)

    assert march.contains(datetime(2024, 3, 1, 0, 0, 0))
    assert march.contains(datetime(2024, 3, 31, 23, 59, 59))
    assert not march.contains(datetime(2024, 4, 1, 0, 0, 0))
    assert not march.contains(date(2024, 2, 29))
    assert not march.contains(None)


def test_month_shift_crosses_years():
    assert Month(2024, 1).previous() == Month(2023, 12)
    assert Month(2023, 11).shift(3) == Month(2024, 2)


def test_month_parse_and_labels():
    month = Month.parse("2024-03")

    assert month.key == "2024-03"
    assert month.label == "Marzo 2024"
    assert month.short_label == "Mar"
    assert month.last_day == date(2024, 3, 31)


@pytest.mark.parametrize("key", ["", "2024", "2024-13", "marzo"])
def test_month_parse_rejects_invalid_keys(key):
    with pytest.raises(ValueError):
        Month.parse(key)


def test_build_ncf_pads_suffix():
    assert build_ncf("1") == "B010000001"
    assert build_ncf(42, prefix="B02000") == "B020000042"


@pytest.mark.parametrize("suffix", ["", "12345", "12a"])
def test_build_ncf_rejects_invalid_suffix(suffix):
    with pytest.raises(ValidationError):
        build_ncf(suffix)


def test_next_suffix_follows_last_saved_number():
    assert ncf_suffix_number("B010000041") == 41
    assert ncf_suffix_number("ABC") is None
    assert next_ncf_suffix(41) == "0042"
    assert next_ncf_suffix(None) == "0001"
