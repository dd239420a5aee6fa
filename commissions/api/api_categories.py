"""
API JSON per le categorie (Category) del calcolatore.

GET    /api/categories/
POST   /api/categories/
PATCH  /api/categories/<id>
DELETE /api/categories/<id>
"""

from __future__ import annotations

from flask import Blueprint, request

from commissions.api.responses import ok
from commissions.models import Category
from commissions.services.category_service import (
    create_category,
    delete_category,
    list_categories,
    update_category,
)

api_categories_bp = Blueprint("api_categories", __name__)


def _category_to_dict(category: Category) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "percentage": float(category.percentage),
        "color": category.color,
        "is_default": category.is_default,
    }


@api_categories_bp.route("/", methods=["GET"])
def api_list_categories():
    """
    Output:
    {
      "success": true,
      "message": "",
      "payload": [{"id": ..., "name": "...", "percentage": 10.0, "color": "#..."}]
    }
    """
    return ok([_category_to_dict(c) for c in list_categories()])


@api_categories_bp.route("/", methods=["POST"])
def api_create_category():
    data = request.get_json(silent=True) or {}
    category = create_category(
        data.get("name"),
        data.get("percentage"),
        color=data.get("color"),
        is_default=data.get("is_default", False),
    )
    return ok(_category_to_dict(category), "Categoria creata.", 201)


@api_categories_bp.route("/<int:category_id>", methods=["PATCH"])
def api_update_category(category_id: int):
    data = request.get_json(silent=True) or {}
    category = update_category(
        category_id,
        name=data.get("name"),
        percentage=data.get("percentage"),
        color=data.get("color"),
        is_default=data.get("is_default"),
    )
    return ok(_category_to_dict(category), "Categoria aggiornata.")


@api_categories_bp.route("/<int:category_id>", methods=["DELETE"])
def api_delete_category(category_id: int):
    delete_category(category_id)
    return ok({"category_id": category_id}, "Categoria eliminata.")
