"""
Unit of Work Pattern.
Gestisce la transazione del database atomica e l'accesso ai repository.
"""
from typing import Optional
from commissions.extensions import db

from commissions.repositories.category_repo import CategoryRepository
from commissions.repositories.invoice_repo import InvoiceRepository
from commissions.repositories.seller_repo import SellerRepository
from commissions.repositories.setting_repo import SettingRepository

class UnitOfWork:
    def __init__(self):
        self.session = db.session
        self._categories: Optional[CategoryRepository] = None
        self._invoices: Optional[InvoiceRepository] = None
        self._sellers: Optional[SellerRepository] = None
        self._settings: Optional[SettingRepository] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
            return False
        # Flask gestisce la chiusura della sessione, non chiudere qui

    @property
    def categories(self) -> CategoryRepository:
        if self._categories is None:
            self._categories = CategoryRepository(self.session)
        return self._categories

    @property
    def invoices(self) -> InvoiceRepository:
        if self._invoices is None:
            self._invoices = InvoiceRepository(self.session)
        return self._invoices

    @property
    def sellers(self) -> SellerRepository:
        if self._sellers is None:
            self._sellers = SellerRepository(self.session)
        return self._sellers

    @property
    def settings(self) -> SettingRepository:
        if self._settings is None:
            self._settings = SettingRepository(self.session)
        return self._settings

    def commit(self):
        try:
            self.session.commit()
        except Exception:
            self.rollback()
            raise

    def rollback(self):
        self.session.rollback()
