"""
Tassonomia degli errori dei servizi.

- DUPLICATE_NCF: creazione/aggiornamento violerebbe l'unicità dell'NCF
- NOT_FOUND: record inesistente
- STORAGE_ERROR: errore del database su qualunque operazione
- VALIDATION: input rifiutato localmente

Nessun errore prevede retry: l'azione viene annullata e l'utente la ripete.
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from commissions.extensions import db

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class CommissionError(Exception):
    """Errore base dei servizi, con codice stabile usato dall'API."""

    code = "ERROR"

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class DuplicateNcfError(CommissionError):
    code = "DUPLICATE_NCF"

    def __init__(self, ncf: str) -> None:
        super().__init__(f"Esiste già una fattura con NCF {ncf}")
        self.ncf = ncf


class NotFoundError(CommissionError):
    code = "NOT_FOUND"


class StorageError(CommissionError):
    code = "STORAGE_ERROR"


class ValidationError(CommissionError):
    code = "VALIDATION"


def storage_guard(func: F) -> F:
    """
    Converte gli errori SQLAlchemy in StorageError.

    La sessione viene riportata allo stato precedente: nessuno stato parziale
    resta visibile dopo un errore del database.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as exc:
            db.session.rollback()
            logger.exception(
                "Errore di storage in %s",
                func.__name__,
                extra={"component": "storage", "operation": func.__name__},
            )
            raise StorageError("Errore di accesso al database") from exc

    return wrapper  # type: ignore[return-value]
