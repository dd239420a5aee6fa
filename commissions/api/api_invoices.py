"""
API JSON per le fatture (Invoice).

GET    /api/invoices/?month=YYYY-MM&seller_id=N
POST   /api/invoices/
GET    /api/invoices/<id>
PUT    /api/invoices/<id>
DELETE /api/invoices/<id>
"""

from __future__ import annotations

import dataclasses
from decimal import Decimal
from typing import Optional

from flask import Blueprint, current_app, request

from commissions.api.responses import fail, ok
from commissions.services.calculator import parse_amount
from commissions.services.dto.invoice_input import InvoiceInput
from commissions.services.dto.month import Month
from commissions.services.invoice_service import (
    create_invoice,
    delete_invoice,
    get_invoice,
    invoice_to_dict,
    lines_from_allocations,
    list_invoices,
    update_invoice,
)
from commissions.services.seller_service import get_selected_seller
from commissions.services.settings_service import get_ncf_prefix

api_invoices_bp = Blueprint("api_invoices", __name__)


def _parse_seller_id(value) -> Optional[int]:
    try:
        return int(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def _input_from_request(data: dict) -> InvoiceInput:
    """
    Le righe arrivano come "allocations" (id categoria -> importo, dal
    calcolatore) oppure come "products" già completi di nome e percentuale.
    """
    invoice_input = InvoiceInput.from_payload(data, ncf_prefix=get_ncf_prefix())
    raw_allocations = data.get("allocations")
    if isinstance(raw_allocations, dict):
        allocations = {
            str(key): parse_amount(value) or 0 for key, value in raw_allocations.items()
        }
        invoice_input = dataclasses.replace(
            invoice_input, lines=lines_from_allocations(allocations)
        )
    return invoice_input


@api_invoices_bp.route("/", methods=["GET"])
def api_list_invoices():
    month = None
    month_key = request.args.get("month")
    if month_key:
        try:
            month = Month.parse(month_key)
        except ValueError:
            return fail("Parametro month non valido (formato YYYY-MM).")

    invoices = list_invoices(
        seller_id=_parse_seller_id(request.args.get("seller_id")),
        month=month,
    )
    payload = {
        "invoices": [invoice_to_dict(inv) for inv in invoices],
        "count": len(invoices),
        "total_sales": sum(inv.total_amount for inv in invoices),
        "total_commission": float(
            sum((Decimal(inv.total_commission) for inv in invoices), Decimal(0))
        ),
    }
    return ok(payload)


@api_invoices_bp.route("/", methods=["POST"])
def api_create_invoice():
    """
    Body JSON atteso:
    {
      "ncf_suffix": "0001",           # oppure "ncf": "B010000001"
      "invoice_date": "2024-03-15",   # opzionale
      "total_amount": "1,000",
      "allocations": {"1": 300, "2": 200},
      "seller_id": 1                  # opzionale, default = venditore selezionato
    }
    """
    data = request.get_json(silent=True) or {}
    invoice_input = _input_from_request(data)

    if invoice_input.seller_id is None:
        seller = get_selected_seller()
        if seller is not None:
            invoice_input.seller_id = seller.id

    invoice = create_invoice(invoice_input)
    current_app.logger.info(
        "Fattura creata via API",
        extra={"component": "api", "invoice_id": invoice.id},
    )
    return ok(invoice_to_dict(invoice), "Fattura salvata con successo.", 201)


@api_invoices_bp.route("/<int:invoice_id>", methods=["GET"])
def api_get_invoice(invoice_id: int):
    return ok(invoice_to_dict(get_invoice(invoice_id)))


@api_invoices_bp.route("/<int:invoice_id>", methods=["PUT"])
def api_update_invoice(invoice_id: int):
    """Sostituzione completa: stessi campi della creazione."""
    data = request.get_json(silent=True) or {}
    invoice = update_invoice(invoice_id, _input_from_request(data))
    return ok(invoice_to_dict(invoice), "Fattura aggiornata con successo.")


@api_invoices_bp.route("/<int:invoice_id>", methods=["DELETE"])
def api_delete_invoice(invoice_id: int):
    delete_invoice(invoice_id)
    return ok({"invoice_id": invoice_id}, "Fattura eliminata.")
