"""
Package repositories.
Espone i Repository per l'accesso ai dati.
"""

from .category_repo import CategoryRepository
from .invoice_repo import InvoiceRepository
from .seller_repo import SellerRepository
from .setting_repo import SettingRepository

__all__ = [
    "CategoryRepository",
    "InvoiceRepository",
    "SellerRepository",
    "SettingRepository",
]
