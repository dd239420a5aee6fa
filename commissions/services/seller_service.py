"""
Servizi per la gestione dei venditori (Seller).

Il venditore selezionato è stato applicativo della sessione utente (chiave
``selected_seller_id`` nella sessione Flask); la regola di risoluzione è una
funzione pura.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from flask import current_app, session

from commissions.models import Seller
from commissions.services.errors import NotFoundError, ValidationError, storage_guard
from commissions.services.logging import log_structured_event
from commissions.services.unit_of_work import UnitOfWork

SELECTED_SELLER_KEY = "selected_seller_id"


def resolve_selected_seller(
    sellers: Sequence[Seller], selected_id: Optional[int]
) -> Optional[Seller]:
    """
    Venditore scelto esplicitamente se ancora esistente, altrimenti il primo
    attivo, altrimenti nessuno.
    """
    if selected_id is not None:
        for seller in sellers:
            if seller.id == selected_id:
                return seller
    return next((s for s in sellers if s.is_active), None)


@storage_guard
def list_sellers() -> List[Seller]:
    """
    Venditori in ordine di creazione.

    Se la tabella è vuota viene creato il venditore di default.
    """
    with UnitOfWork() as uow:
        sellers = uow.sellers.list_ordered()
        if sellers:
            return sellers

        seller = Seller(
            name=current_app.config.get("DEFAULT_SELLER_NAME", "Venditore principale"),
            is_active=True,
        )
        uow.sellers.add(seller)
        uow.commit()

    log_structured_event(
        "seller_bootstrapped",
        message="Creato il venditore di default",
        seller_id=seller.id,
        seller_name=seller.name,
    )
    return [seller]


def get_selected_seller() -> Optional[Seller]:
    return resolve_selected_seller(list_sellers(), session.get(SELECTED_SELLER_KEY))


def select_seller(seller_id: Optional[int]) -> Optional[Seller]:
    """Seleziona un venditore (None = torna alla regola di default)."""
    if seller_id is None:
        session.pop(SELECTED_SELLER_KEY, None)
        return get_selected_seller()

    sellers = list_sellers()
    if not any(s.id == seller_id for s in sellers):
        raise NotFoundError("Venditore non trovato")
    session[SELECTED_SELLER_KEY] = seller_id
    return resolve_selected_seller(sellers, seller_id)


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Il nome del venditore è obbligatorio.")
    return cleaned


@storage_guard
def create_seller(name: str, is_active: bool = True) -> Seller:
    seller = Seller(name=_clean_name(name), is_active=bool(is_active))
    with UnitOfWork() as uow:
        # Selezione effettiva prima dell'inserimento (esplicita o primo attivo)
        previous = resolve_selected_seller(
            uow.sellers.list_ordered(), session.get(SELECTED_SELLER_KEY)
        )
        uow.sellers.add(seller)
        uow.commit()

    if previous is None:
        session[SELECTED_SELLER_KEY] = seller.id

    log_structured_event("seller_created", message="Venditore creato", seller_id=seller.id)
    return seller


@storage_guard
def update_seller(
    seller_id: int,
    *,
    name: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> Seller:
    with UnitOfWork() as uow:
        seller = uow.sellers.get_by_id(seller_id)
        if seller is None:
            raise NotFoundError("Venditore non trovato")

        if name is not None:
            seller.name = _clean_name(name)
        if is_active is not None:
            seller.is_active = bool(is_active)

        uow.commit()

    log_structured_event(
        "seller_updated",
        message="Venditore aggiornato",
        seller_id=seller.id,
        is_active=seller.is_active,
    )
    return seller


@storage_guard
def delete_seller(seller_id: int) -> Optional[Seller]:
    """
    Elimina il venditore; le sue fatture restano senza venditore.
    Restituisce il venditore selezionato dopo l'eliminazione.
    """
    with UnitOfWork() as uow:
        seller = uow.sellers.get_by_id(seller_id)
        if seller is None:
            raise NotFoundError("Venditore non trovato")

        detached = uow.sellers.detach_invoices(seller_id)
        uow.sellers.delete(seller)
        uow.commit()
        remaining = uow.sellers.list_ordered()

    selected_id = session.get(SELECTED_SELLER_KEY)
    if selected_id == seller_id:
        fallback = resolve_selected_seller(remaining, None)
        if fallback is None:
            session.pop(SELECTED_SELLER_KEY, None)
        else:
            session[SELECTED_SELLER_KEY] = fallback.id

    log_structured_event(
        "seller_deleted",
        message="Venditore eliminato",
        seller_id=seller_id,
        detached_invoices=detached,
    )
    return resolve_selected_seller(remaining, session.get(SELECTED_SELLER_KEY))
