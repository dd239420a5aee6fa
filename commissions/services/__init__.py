"""
Pacchetto per i servizi (logica di business) dell'applicazione.

I servizi orchestrano:
- calcolo commissioni e aggregazioni (funzioni pure)
- repository (accesso al DB) tramite Unit of Work
- validazioni e transazioni
- logging strutturato
- generazione dei report PDF
"""

from .aggregation_service import (
    build_monthly_breakdown,
    build_monthly_summary,
    filter_invoices_by_month,
    list_available_months,
)
from .calculator import breakdown_from_lines, calculate_breakdown, parse_amount
from .category_service import (
    category_rates,
    create_category,
    delete_category,
    list_categories,
    update_category,
)
from .errors import (
    CommissionError,
    DuplicateNcfError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .invoice_service import (
    create_invoice,
    delete_invoice,
    get_invoice,
    list_invoices,
    update_invoice,
)
from .report_service import render_breakdown_pdf, render_summary_pdf
from .seller_service import (
    create_seller,
    delete_seller,
    get_selected_seller,
    list_sellers,
    select_seller,
    update_seller,
)
from .settings_service import (
    get_next_ncf_suffix,
    get_rest_percentage,
    get_setting,
    set_rest_percentage,
    set_setting,
)
from .statistics_service import build_trend, compare_with_previous_month, compute_month_totals

__all__ = [
    # Calcolatore
    "calculate_breakdown",
    "breakdown_from_lines",
    "parse_amount",
    # Aggregazioni
    "build_monthly_breakdown",
    "build_monthly_summary",
    "filter_invoices_by_month",
    "list_available_months",
    # Statistiche
    "compute_month_totals",
    "compare_with_previous_month",
    "build_trend",
    # Fatture
    "create_invoice",
    "update_invoice",
    "delete_invoice",
    "get_invoice",
    "list_invoices",
    # Venditori
    "list_sellers",
    "create_seller",
    "update_seller",
    "delete_seller",
    "select_seller",
    "get_selected_seller",
    # Categorie
    "list_categories",
    "category_rates",
    "create_category",
    "update_category",
    "delete_category",
    # Impostazioni
    "get_setting",
    "set_setting",
    "get_rest_percentage",
    "set_rest_percentage",
    "get_next_ncf_suffix",
    # Report
    "render_breakdown_pdf",
    "render_summary_pdf",
    # Errori
    "CommissionError",
    "DuplicateNcfError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
