"""
Modello Category (tabella: categories).

Rappresenta una categoria con percentuale di commissione propria
(nell'interfaccia chiamata "prodotto"). L'ordine di inserimento è anche
l'ordine di visualizzazione nel calcolatore.
"""

from datetime import datetime

from commissions.extensions import db


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(128), nullable=False)
    percentage = db.Column(db.Numeric(5, 2), nullable=False, default=0)
    color = db.Column(db.String(32), nullable=False, default="#6b7280")
    is_default = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(
        db.DateTime, nullable=False, default=datetime.now, index=True
    )

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name!r} percentage={self.percentage}>"
