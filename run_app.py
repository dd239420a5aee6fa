"""
Avvio rapido del calcolatore di commissioni con un singolo comando:

    python run_app.py

Crea le tabelle mancanti e avvia il server con la configurazione di sviluppo.
"""

from __future__ import annotations

import os

from commissions import create_app
from commissions.extensions import db
from config import DevConfig


def main() -> None:
    app = create_app(DevConfig)
    with app.app_context():
        import commissions.models  # noqa: F401

        db.create_all()

    host = os.environ.get("FLASK_RUN_HOST", "127.0.0.1")
    port = int(os.environ.get("FLASK_RUN_PORT", "5000"))

    app.logger.info("Avvio dell'applicazione tramite run_app.py", extra={"component": "launcher"})
    app.run(host=host, port=port, debug=app.config.get("DEBUG", False))


if __name__ == "__main__":
    main()
