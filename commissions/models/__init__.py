"""
Pacchetto per i modelli SQLAlchemy.

Qui vengono esportate le classi modello principali.
"""

from .seller import Seller
from .invoice import Invoice
from .invoice_product import InvoiceProduct
from .category import Category
from .app_setting import AppSetting

__all__ = [
    "Seller",
    "Invoice",
    "InvoiceProduct",
    "Category",
    "AppSetting",
]
