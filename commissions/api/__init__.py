"""
Pacchetto per le API JSON dell'applicazione.

Contiene:
- api_calculator_bp -> anteprima del calcolo commissioni
- api_invoices_bp   -> CRUD fatture
- api_sellers_bp    -> venditori e selezione corrente
- api_categories_bp -> configurazione categorie
- api_settings_bp   -> percentuale del resto e suggerimento NCF
- api_reports_bp    -> riepiloghi mensili, statistiche e PDF
"""

from .api_calculator import api_calculator_bp
from .api_categories import api_categories_bp
from .api_invoices import api_invoices_bp
from .api_reports import api_reports_bp
from .api_sellers import api_sellers_bp
from .api_settings import api_settings_bp
from .responses import register_error_handlers

__all__ = [
    "api_calculator_bp",
    "api_categories_bp",
    "api_invoices_bp",
    "api_reports_bp",
    "api_sellers_bp",
    "api_settings_bp",
    "register_error_handlers",
]
