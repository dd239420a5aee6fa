"""
API per riepiloghi mensili, statistiche e report PDF.

Tutti gli endpoint accettano ``month=YYYY-MM`` (default: mese corrente) e un
filtro opzionale ``seller_id``.
"""

from __future__ import annotations

import io
from datetime import date
from typing import Optional

from flask import Blueprint, current_app, request, send_file

from commissions.api.responses import fail, ok
from commissions.services.aggregation_service import (
    build_monthly_breakdown,
    build_monthly_summary,
    list_available_months,
)
from commissions.services.dto.month import Month
from commissions.services.invoice_service import list_invoices
from commissions.services.report_service import (
    breakdown_filename,
    render_breakdown_pdf,
    render_summary_pdf,
    summary_filename,
)
from commissions.services.seller_service import get_selected_seller
from commissions.services.statistics_service import build_trend, compare_with_previous_month

api_reports_bp = Blueprint("api_reports", __name__)


def _requested_month() -> Optional[Month]:
    key = request.args.get("month")
    if not key:
        return Month.from_date(date.today())
    try:
        return Month.parse(key)
    except ValueError:
        return None


def _requested_invoices():
    raw = request.args.get("seller_id")
    seller_id = int(raw) if raw and raw.isdigit() else None
    return list_invoices(seller_id=seller_id)


def _invalid_month():
    return fail("Parametro month non valido (formato YYYY-MM).")


@api_reports_bp.route("/months", methods=["GET"])
def api_available_months():
    months = list_available_months(
        _requested_invoices(),
        date.today(),
        recent=current_app.config.get("RECENT_MONTHS", 4),
    )
    return ok([{"key": m.key, "label": m.label} for m in months])


@api_reports_bp.route("/breakdown", methods=["GET"])
def api_breakdown():
    month = _requested_month()
    if month is None:
        return _invalid_month()
    return ok(build_monthly_breakdown(_requested_invoices(), month).to_dict())


@api_reports_bp.route("/summary", methods=["GET"])
def api_summary():
    month = _requested_month()
    if month is None:
        return _invalid_month()
    return ok(build_monthly_summary(_requested_invoices(), month).to_dict())


@api_reports_bp.route("/statistics", methods=["GET"])
def api_statistics():
    month = _requested_month()
    if month is None:
        return _invalid_month()
    invoices = _requested_invoices()
    comparison = compare_with_previous_month(invoices, month)
    trend = build_trend(invoices, month, size=current_app.config.get("TREND_MONTHS", 6))
    return ok(
        {
            "comparison": comparison.to_dict(),
            "trend": [point.to_dict() for point in trend],
        }
    )


@api_reports_bp.route("/breakdown.pdf", methods=["GET"])
def api_breakdown_pdf():
    month = _requested_month()
    if month is None:
        return _invalid_month()
    breakdown = build_monthly_breakdown(_requested_invoices(), month)
    seller = get_selected_seller()
    pdf = render_breakdown_pdf(breakdown, seller_name=seller.name if seller else None)
    return send_file(
        io.BytesIO(pdf),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=breakdown_filename(breakdown),
    )


@api_reports_bp.route("/summary.pdf", methods=["GET"])
def api_summary_pdf():
    month = _requested_month()
    if month is None:
        return _invalid_month()
    summary = build_monthly_summary(_requested_invoices(), month)
    pdf = render_summary_pdf(summary)
    return send_file(
        io.BytesIO(pdf),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=summary_filename(summary),
    )
