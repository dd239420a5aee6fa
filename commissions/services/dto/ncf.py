"""
Helper per l'NCF (numero fiscale): prefisso fisso + suffisso di 4 cifre.

Solo il suffisso è modificabile dall'utente; il valore salvato è la
concatenazione completa ed è la chiave di unicità.
"""

from __future__ import annotations

from typing import Optional, Union

from commissions.services.errors import ValidationError

DEFAULT_NCF_PREFIX = "B01000"
NCF_SUFFIX_LENGTH = 4


def build_ncf(suffix: Union[str, int], prefix: str = DEFAULT_NCF_PREFIX) -> str:
    raw = str(suffix).strip()
    if not raw.isdigit() or len(raw) > NCF_SUFFIX_LENGTH:
        raise ValidationError(
            f"Il suffisso NCF deve contenere da 1 a {NCF_SUFFIX_LENGTH} cifre"
        )
    return f"{prefix}{raw.zfill(NCF_SUFFIX_LENGTH)}"


def ncf_suffix_number(ncf: Optional[str]) -> Optional[int]:
    """Valore numerico delle ultime 4 cifre, None se non numeriche."""
    if not ncf:
        return None
    tail = ncf[-NCF_SUFFIX_LENGTH:]
    return int(tail) if tail.isdigit() else None


def next_ncf_suffix(last_number: Optional[int]) -> str:
    return str((last_number or 0) + 1).zfill(NCF_SUFFIX_LENGTH)
