"""
Repository specifico per Seller.
"""
from typing import List

from commissions.models import Invoice, Seller
from commissions.repositories.base import SqlAlchemyRepository


class SellerRepository(SqlAlchemyRepository[Seller]):
    def __init__(self, session):
        super().__init__(session, Seller)

    def list_ordered(self, *order_by) -> List[Seller]:
        """Venditori dal più vecchio al più recente."""
        return super().list_ordered(*(order_by or (Seller.created_at.asc(), Seller.id.asc())))

    def detach_invoices(self, seller_id: int) -> int:
        """
        Scollega le fatture dal venditore (seller_id -> NULL).
        Equivale a ON DELETE SET NULL anche su motori che non applicano le FK.
        """
        return (
            self.session.query(Invoice)
            .filter(Invoice.seller_id == seller_id)
            .update({Invoice.seller_id: None}, synchronize_session="fetch")
        )
