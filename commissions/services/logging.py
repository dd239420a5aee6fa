"""Helper per logging strutturato JSON nei servizi applicativi."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

EVENTS_LOGGER_NAME = "commissions.events"

# Attributi del LogRecord che non possono comparire in extra
_RESERVED_KEYS = set(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def log_structured_event(
    action: str,
    *,
    message: Optional[str] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """Registra un evento di business (fattura salvata, NCF duplicato, report generato...).

    Il formatter JSON è configurato sul root logger da ``commissions.extensions``.
    Un campo che coincide con un attributo del LogRecord (es. ``name``) viene
    registrato come ``event_<campo>``.
    """

    logger = logging.getLogger(EVENTS_LOGGER_NAME)
    log_method = getattr(logger, level.lower(), logger.info)

    payload: Dict[str, Any] = {"action": action}
    for key, value in fields.items():
        payload[f"event_{key}" if key in _RESERVED_KEYS else key] = value

    try:
        log_method(message or "Evento applicativo", extra=payload)
    except Exception:
        # Il logging non deve mai interrompere il flusso di business
        logger.debug("Logging strutturato fallito", exc_info=True)
