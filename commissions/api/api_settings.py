"""
API JSON per le impostazioni: percentuale del resto e suggerimento NCF.
"""

from __future__ import annotations

from flask import Blueprint, request

from commissions.api.responses import ok
from commissions.services.settings_service import (
    get_ncf_prefix,
    get_next_ncf_suffix,
    get_rest_percentage,
    set_rest_percentage,
)

api_settings_bp = Blueprint("api_settings", __name__)


@api_settings_bp.route("/", methods=["GET"])
def api_get_settings():
    return ok(
        {
            "rest_percentage": float(get_rest_percentage()),
            "ncf_prefix": get_ncf_prefix(),
            "next_ncf_suffix": get_next_ncf_suffix(),
        }
    )


@api_settings_bp.route("/rest-percentage", methods=["PUT"])
def api_set_rest_percentage():
    """Body: {"rest_percentage": 25}. Vale per le fatture salvate da ora in poi."""
    data = request.get_json(silent=True) or {}
    percentage = set_rest_percentage(data.get("rest_percentage"))
    return ok({"rest_percentage": float(percentage)}, "Percentuale del resto aggiornata.")
