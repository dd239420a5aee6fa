"""
Modello AppSetting (tabella: app_settings).
Impostazioni chiave/valore modificabili dall'utente, es. la percentuale del
resto ("rest_percentage") e l'ultimo NCF salvato ("last_ncf_number").
"""
from datetime import datetime

from commissions.extensions import db


class AppSetting(db.Model):
    __tablename__ = "app_settings"

    id = db.Column(db.Integer, primary_key=True)
    setting_key = db.Column(db.String(191), unique=True, nullable=False)
    value = db.Column(db.Text, nullable=True)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.now, onupdate=datetime.now
    )

    def __repr__(self) -> str:
        return f"<AppSetting {self.setting_key}={self.value!r}>"
