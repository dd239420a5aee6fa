"""
Repository specifico per Invoice (fatture con righe prodotto).
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import selectinload

from commissions.models import Invoice
from commissions.repositories.base import SqlAlchemyRepository

class InvoiceRepository(SqlAlchemyRepository[Invoice]):
    def __init__(self, session):
        super().__init__(session, Invoice)

    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        """Restituisce la fattura con le righe già caricate."""
        if invoice_id is None:
            return None
        return (
            self.session.query(Invoice)
            .options(selectinload(Invoice.products))
            .filter(Invoice.id == invoice_id)
            .one_or_none()
        )

    def get_by_ncf(self, ncf: str, exclude_id: Optional[int] = None) -> Optional[Invoice]:
        """
        Cerca una fattura con lo stesso NCF.
        Con exclude_id la fattura stessa non conta (caso aggiornamento).
        """
        if not ncf:
            return None
        query = self.session.query(Invoice).filter(Invoice.ncf == ncf)
        if exclude_id is not None:
            query = query.filter(Invoice.id != exclude_id)
        return query.first()

    def list_recent_first(self, seller_id: Optional[int] = None) -> List[Invoice]:
        """Tutte le fatture, dalla più recente (created_at) alla più vecchia, con righe."""
        query = self.session.query(Invoice).options(
            selectinload(Invoice.products), selectinload(Invoice.seller)
        )
        if seller_id is not None:
            query = query.filter(Invoice.seller_id == seller_id)
        return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()
