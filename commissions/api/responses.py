"""
Envelope JSON comune alle API e conversione degli errori dei servizi.

Formato: {"success": bool, "message": str, "payload": ...}
"""

from __future__ import annotations

from typing import Any

from flask import Flask, jsonify

from commissions.services.errors import CommissionError

ERROR_STATUS = {
    "DUPLICATE_NCF": 409,
    "NOT_FOUND": 404,
    "VALIDATION": 400,
    "STORAGE_ERROR": 503,
}


def ok(payload: Any = None, message: str = "", status: int = 200):
    return jsonify({"success": True, "message": message, "payload": payload}), status


def fail(message: str, status: int = 400, code: str = "VALIDATION"):
    return jsonify(
        {
            "success": False,
            "message": message,
            "payload": {"code": code},
        }
    ), status


def register_error_handlers(app: Flask) -> None:
    """Ogni CommissionError non gestito diventa una risposta con l'envelope standard."""

    @app.errorhandler(CommissionError)
    def handle_commission_error(exc: CommissionError):
        return fail(exc.message, ERROR_STATUS.get(exc.code, 400), exc.code)
