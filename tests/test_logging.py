import json
import logging
from decimal import Decimal

from commissions.extensions import JsonFormatter
from commissions.services.logging import log_structured_event


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord(
        "commissions.events", logging.INFO, __file__, 1, "Fattura salvata", None, None
    )
    record.action = "invoice_created"
    record.total_commission = Decimal("195.0000")

    data = json.loads(JsonFormatter().format(record))

    assert data["level"] == "INFO"
    assert data["message"] == "Fattura salvata"
    assert data["extra"] == {"action": "invoice_created", "total_commission": "195.0000"}
    assert data["timestamp"].endswith("Z")


def test_structured_event_reaches_logger(caplog):
    with caplog.at_level(logging.INFO, logger="commissions.events"):
        log_structured_event("report_rendered", message="Report generato", month="2024-03")

    record = caplog.records[-1]
    assert record.action == "report_rendered"
    assert record.month == "2024-03"


def test_reserved_field_names_are_prefixed(caplog):
    with caplog.at_level(logging.INFO, logger="commissions.events"):
        log_structured_event("seller_created", name="Anna")

    assert caplog.records[-1].event_name == "Anna"
