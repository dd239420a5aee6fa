"""
Modello Invoice (tabella: invoices).

Rappresenta una fattura salvata con la scomposizione delle commissioni
calcolata al momento del salvataggio.
"""

from datetime import datetime

from commissions.extensions import db


class Invoice(db.Model):
    __tablename__ = "invoices"

    id = db.Column(db.Integer, primary_key=True)

    # Numero fiscale (prefisso fisso + 4 cifre), chiave di business univoca
    ncf = db.Column(db.String(32), nullable=False, unique=True, index=True)
    invoice_date = db.Column(db.Date, nullable=True, index=True)

    # Importi interi in unità di valuta
    total_amount = db.Column(db.Integer, nullable=False, default=0)
    rest_amount = db.Column(db.Integer, nullable=False, default=0)

    # Percentuale del resto in vigore al salvataggio (copia congelata)
    rest_percentage = db.Column(db.Numeric(5, 2), nullable=False, default=0)
    rest_commission = db.Column(db.Numeric(15, 4), nullable=False, default=0)
    total_commission = db.Column(db.Numeric(15, 4), nullable=False, default=0)

    seller_id = db.Column(
        db.Integer,
        db.ForeignKey("sellers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.now, index=True
    )

    # Relazioni
    seller = db.relationship("Seller", backref="invoices")
    products = db.relationship(
        "InvoiceProduct",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceProduct.id",
    )

    @property
    def effective_date(self):
        """Data usata per i raggruppamenti mensili: data fattura o, in mancanza, creazione."""
        if self.invoice_date is not None:
            return self.invoice_date
        return self.created_at.date() if self.created_at else None

    def __repr__(self) -> str:
        return f"<Invoice id={self.id} ncf={self.ncf!r}>"
