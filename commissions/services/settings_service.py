"""
Servizi per la gestione delle impostazioni applicative.

Le impostazioni modificabili dall'utente (percentuale del resto, ultimo NCF
usato) sono salvate nella tabella app_settings; i valori di default arrivano
dalla configurazione Flask.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional

from flask import current_app

from commissions.services.dto.invoice_input import parse_percentage, validate_percentage
from commissions.services.dto.ncf import DEFAULT_NCF_PREFIX, next_ncf_suffix
from commissions.services.errors import ValidationError, storage_guard
from commissions.services.logging import log_structured_event
from commissions.services.unit_of_work import UnitOfWork

REST_PERCENTAGE_KEY = "rest_percentage"
LAST_NCF_NUMBER_KEY = "last_ncf_number"


@storage_guard
def get_setting(key: str, default: str = "") -> str:
    with UnitOfWork() as uow:
        value = uow.settings.get_value(key)
    return default if value is None else value


@storage_guard
def set_setting(key: str, value: Optional[str]) -> None:
    with UnitOfWork() as uow:
        uow.settings.set_value(key, value)
        uow.commit()


def get_default_rest_percentage() -> Decimal:
    return parse_percentage(current_app.config.get("DEFAULT_REST_PERCENTAGE", "25")) or Decimal(0)


def get_rest_percentage() -> Decimal:
    stored = parse_percentage(get_setting(REST_PERCENTAGE_KEY, ""))
    return stored if stored is not None else get_default_rest_percentage()


def set_rest_percentage(value) -> Decimal:
    percentage = validate_percentage(value)
    set_setting(REST_PERCENTAGE_KEY, str(percentage))
    log_structured_event(
        "settings_updated",
        message="Percentuale del resto aggiornata",
        setting=REST_PERCENTAGE_KEY,
        value=str(percentage),
    )
    return percentage


def get_last_ncf_number() -> int:
    raw = get_setting(LAST_NCF_NUMBER_KEY, "0")
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


def set_last_ncf_number(number: int) -> None:
    if number is None or int(number) < 0:
        raise ValidationError("Numero NCF non valido")
    set_setting(LAST_NCF_NUMBER_KEY, str(int(number)))


def get_next_ncf_suffix() -> str:
    """Suffisso suggerito per la prossima fattura (ultimo + 1). Solo un aiuto per la UI."""
    return next_ncf_suffix(get_last_ncf_number())


def get_ncf_prefix() -> str:
    return current_app.config.get("NCF_PREFIX", DEFAULT_NCF_PREFIX)
