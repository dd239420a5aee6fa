"""
API JSON per i venditori (Seller) e la selezione del venditore corrente.
"""

from __future__ import annotations

from flask import Blueprint, request

from commissions.api.responses import fail, ok
from commissions.models import Seller
from commissions.services.seller_service import (
    create_seller,
    delete_seller,
    get_selected_seller,
    list_sellers,
    select_seller,
    update_seller,
)

api_sellers_bp = Blueprint("api_sellers", __name__)


def _seller_to_dict(seller: Seller) -> dict:
    return {
        "id": seller.id,
        "name": seller.name,
        "is_active": seller.is_active,
        "created_at": seller.created_at.isoformat() if seller.created_at else None,
    }


def _selected_payload(seller):
    return _seller_to_dict(seller) if seller is not None else None


@api_sellers_bp.route("/", methods=["GET"])
def api_list_sellers():
    sellers = list_sellers()
    selected = get_selected_seller()
    return ok(
        {
            "sellers": [_seller_to_dict(s) for s in sellers],
            "selected": _selected_payload(selected),
        }
    )


@api_sellers_bp.route("/", methods=["POST"])
def api_create_seller():
    data = request.get_json(silent=True) or {}
    seller = create_seller(data.get("name"), is_active=data.get("is_active", True))
    return ok(_seller_to_dict(seller), "Venditore creato.", 201)


@api_sellers_bp.route("/<int:seller_id>", methods=["PATCH"])
def api_update_seller(seller_id: int):
    data = request.get_json(silent=True) or {}
    seller = update_seller(
        seller_id,
        name=data.get("name"),
        is_active=data.get("is_active"),
    )
    return ok(_seller_to_dict(seller), "Venditore aggiornato.")


@api_sellers_bp.route("/<int:seller_id>", methods=["DELETE"])
def api_delete_seller(seller_id: int):
    selected = delete_seller(seller_id)
    return ok({"selected": _selected_payload(selected)}, "Venditore eliminato.")


@api_sellers_bp.route("/select", methods=["POST"])
def api_select_seller():
    """Body: {"seller_id": N} oppure {"seller_id": null} per la regola di default."""
    data = request.get_json(silent=True) or {}
    seller_id = data.get("seller_id")
    if seller_id is not None:
        try:
            seller_id = int(seller_id)
        except (TypeError, ValueError):
            return fail("seller_id non valido.")

    selected = select_seller(seller_id)
    return ok({"selected": _selected_payload(selected)})
