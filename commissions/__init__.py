"""
Pacchetto principale dell'applicazione Flask per il calcolo delle commissioni.
"""

from flask import Flask, jsonify
from config import DevConfig
from .extensions import init_extensions


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)
    init_extensions(app)

    _register_blueprints(app)

    app.logger.info("Applicazione Flask inizializzata.")

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    return app


def _register_blueprints(app: Flask) -> None:
    from .api import (
        api_calculator_bp,
        api_categories_bp,
        api_invoices_bp,
        api_reports_bp,
        api_sellers_bp,
        api_settings_bp,
        register_error_handlers,
    )

    register_error_handlers(app)
    app.register_blueprint(api_calculator_bp, url_prefix="/api/calculator")
    app.register_blueprint(api_invoices_bp, url_prefix="/api/invoices")
    app.register_blueprint(api_sellers_bp, url_prefix="/api/sellers")
    app.register_blueprint(api_categories_bp, url_prefix="/api/categories")
    app.register_blueprint(api_settings_bp, url_prefix="/api/settings")
    app.register_blueprint(api_reports_bp, url_prefix="/api/reports")
