"""
Modello Seller (tabella: sellers).

Rappresenta il venditore a cui appartengono le commissioni di una fattura.
"""

from datetime import datetime

from commissions.extensions import db


class Seller(db.Model):
    __tablename__ = "sellers"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(255), nullable=False)

    # Un venditore disattivato resta sulle fatture storiche ma non viene proposto
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.now, index=True
    )

    # Note: la relazione 'invoices' è creata da Invoice.seller (backref)

    def __repr__(self) -> str:
        return f"<Seller id={self.id} name={self.name!r}>"
