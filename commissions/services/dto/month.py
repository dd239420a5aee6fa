"""Mese di calendario usato da riepiloghi, statistiche e report."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Union

MONTH_NAMES = [
    "Gennaio", "Febbraio", "Marzo", "Aprile", "Maggio", "Giugno",
    "Luglio", "Agosto", "Settembre", "Ottobre", "Novembre", "Dicembre",
]
MONTH_SHORT_NAMES = [
    "Gen", "Feb", "Mar", "Apr", "Mag", "Giu",
    "Lug", "Ago", "Set", "Ott", "Nov", "Dic",
]


@dataclass(frozen=True, order=True)
class Month:
    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Mese non valido: {self.month}")

    @classmethod
    def from_date(cls, value: date) -> "Month":
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, key: str) -> "Month":
        """Interpreta una chiave 'YYYY-MM'. Solleva ValueError se non valida."""
        try:
            year_str, month_str = (key or "").strip().split("-")
            return cls(int(year_str), int(month_str))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Mese non valido: {key!r}") from exc

    @property
    def key(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    @property
    def label(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    @property
    def short_label(self) -> str:
        return MONTH_SHORT_NAMES[self.month - 1]

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    @property
    def start(self) -> datetime:
        """Primo istante del mese (calendario locale)."""
        return datetime.combine(self.first_day, time.min)

    @property
    def end(self) -> datetime:
        """Ultimo istante del mese (calendario locale)."""
        return datetime.combine(self.last_day, time.max)

    def contains(self, value: Union[date, datetime, None]) -> bool:
        if value is None:
            return False
        if isinstance(value, datetime):
            return self.start <= value <= self.end
        return self.first_day <= value <= self.last_day

    def shift(self, months: int) -> "Month":
        index = self.year * 12 + (self.month - 1) + months
        return Month(index // 12, index % 12 + 1)

    def previous(self) -> "Month":
        return self.shift(-1)

    def __str__(self) -> str:
        return self.key
