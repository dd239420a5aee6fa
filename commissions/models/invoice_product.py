"""
Modello InvoiceProduct (tabella: invoice_products).

Quota del totale fattura allocata a una categoria ("prodotto"). Nome e
percentuale sono copiati dalla configurazione al momento del salvataggio.
"""

from commissions.extensions import db


class InvoiceProduct(db.Model):
    __tablename__ = "invoice_products"

    id = db.Column(db.Integer, primary_key=True)

    invoice_id = db.Column(
        db.Integer,
        db.ForeignKey("invoices.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    product_name = db.Column(db.String(128), nullable=False)
    amount = db.Column(db.Integer, nullable=False, default=0)
    percentage = db.Column(db.Numeric(5, 2), nullable=False, default=0)
    commission = db.Column(db.Numeric(15, 4), nullable=False, default=0)

    invoice = db.relationship("Invoice", back_populates="products")

    def __repr__(self) -> str:
        return (
            f"<InvoiceProduct id={self.id} invoice_id={self.invoice_id} "
            f"product_name={self.product_name!r}>"
        )
