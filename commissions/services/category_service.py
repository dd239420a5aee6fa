"""
Servizi per la configurazione delle categorie (i "prodotti" del calcolatore).

Le modifiche a nome o percentuale non toccano le righe delle fatture già
salvate, che conservano una copia congelata.
"""

from __future__ import annotations

from typing import List, Optional

from commissions.models import Category
from commissions.services.calculator import CategoryRate
from commissions.services.dto.invoice_input import validate_percentage
from commissions.services.errors import NotFoundError, ValidationError, storage_guard
from commissions.services.logging import log_structured_event
from commissions.services.unit_of_work import UnitOfWork

DEFAULT_COLOR = "#6b7280"


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Il nome della categoria è obbligatorio.")
    return cleaned


@storage_guard
def list_categories() -> List[Category]:
    """Tutte le categorie, nell'ordine di inserimento."""
    with UnitOfWork() as uow:
        return uow.categories.list_ordered()


def category_rates(categories: List[Category]) -> List[CategoryRate]:
    """Configurazione categorie nel formato atteso dal calcolatore (chiave = id)."""
    return [
        CategoryRate(
            key=str(category.id),
            name=category.name,
            percentage=category.percentage,
            color=category.color,
        )
        for category in categories
    ]


@storage_guard
def create_category(
    name: str,
    percentage,
    color: Optional[str] = None,
    is_default: bool = False,
) -> Category:
    category = Category(
        name=_clean_name(name),
        percentage=validate_percentage(percentage),
        color=(color or "").strip() or DEFAULT_COLOR,
        is_default=bool(is_default),
    )
    with UnitOfWork() as uow:
        uow.categories.add(category)
        uow.commit()

    log_structured_event(
        "category_created",
        message="Categoria creata",
        category_id=category.id,
        category_name=category.name,
        percentage=str(category.percentage),
    )
    return category


@storage_guard
def update_category(
    category_id: int,
    *,
    name: Optional[str] = None,
    percentage=None,
    color: Optional[str] = None,
    is_default: Optional[bool] = None,
) -> Category:
    with UnitOfWork() as uow:
        category = uow.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Categoria non trovata")

        if name is not None:
            category.name = _clean_name(name)
        if percentage is not None:
            category.percentage = validate_percentage(percentage)
        if color is not None:
            category.color = color.strip() or DEFAULT_COLOR
        if is_default is not None:
            category.is_default = bool(is_default)

        uow.commit()

    log_structured_event(
        "category_updated",
        message="Categoria aggiornata",
        category_id=category.id,
        category_name=category.name,
        percentage=str(category.percentage),
    )
    return category


@storage_guard
def delete_category(category_id: int) -> bool:
    with UnitOfWork() as uow:
        category = uow.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Categoria non trovata")
        uow.categories.delete(category)
        uow.commit()

    log_structured_event("category_deleted", message="Categoria eliminata", category_id=category_id)
    return True
