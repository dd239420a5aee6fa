"""
API JSON del calcolatore delle commissioni.

POST /api/calculator/preview
    Scomposizione in tempo reale per il totale e le allocazioni inserite,
    con le categorie e la percentuale del resto correnti. Nessuna scrittura.
"""

from __future__ import annotations

from flask import Blueprint, request

from commissions.api.responses import fail, ok
from commissions.services.calculator import calculate_breakdown, parse_amount
from commissions.services.category_service import category_rates, list_categories
from commissions.services.dto.invoice_input import validate_percentage
from commissions.services.settings_service import get_rest_percentage

api_calculator_bp = Blueprint("api_calculator", __name__)


@api_calculator_bp.route("/preview", methods=["POST"])
def api_preview():
    """
    Body JSON atteso:
    {
      "total_amount": "1,000",
      "allocations": {"<category_id>": 300, ...},
      "rest_percentage": 25       # opzionale, default = impostazione corrente
    }
    """
    data = request.get_json(silent=True) or {}

    total_amount = parse_amount(data.get("total_amount"))
    if total_amount is None:
        return fail("Totale fattura mancante o non valido.")

    # Valori non interpretabili vengono ignorati, come nel form
    allocations = {}
    raw_allocations = data.get("allocations") or {}
    if isinstance(raw_allocations, dict):
        for key, raw in raw_allocations.items():
            amount = parse_amount(raw)
            if amount is not None:
                allocations[str(key)] = amount

    if data.get("rest_percentage") not in (None, ""):
        rest_percentage = validate_percentage(data.get("rest_percentage"))
    else:
        rest_percentage = get_rest_percentage()

    breakdown = calculate_breakdown(
        total_amount,
        allocations,
        category_rates(list_categories()),
        rest_percentage,
    )
    return ok(breakdown.to_dict())
