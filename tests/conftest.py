"""
Configurazione pytest: app Flask su SQLite in memoria, un database pulito per test.
"""
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from commissions import create_app
from commissions.extensions import db
from config import TestConfig


@pytest.fixture
def app(tmp_path):
    class _Config(TestConfig):
        LOG_DIR = str(tmp_path / "logs")

    app = create_app(_Config)
    with app.app_context():
        import commissions.models  # noqa: F401

        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def request_ctx(app):
    """Contesto di richiesta per i servizi che usano la sessione Flask."""
    with app.test_request_context():
        yield


def make_invoice(
    ncf,
    total_amount,
    products=(),
    rest_amount=0,
    rest_percentage="25",
    invoice_date=None,
    created_at=None,
):
    """
    Fattura in memoria con la stessa forma del modello, per i test delle
    funzioni pure. ``products`` = [(nome, importo, percentuale)].
    """
    rest_pct = Decimal(rest_percentage)
    lines = [
        SimpleNamespace(
            product_name=name,
            amount=amount,
            percentage=Decimal(str(pct)),
            commission=Decimal(amount) * Decimal(str(pct)) / 100,
        )
        for name, amount, pct in products
    ]
    rest_commission = Decimal(rest_amount) * rest_pct / 100
    return SimpleNamespace(
        ncf=ncf,
        invoice_date=invoice_date,
        created_at=created_at or datetime(2024, 1, 1, 12, 0),
        total_amount=total_amount,
        rest_amount=rest_amount,
        rest_percentage=rest_pct,
        rest_commission=rest_commission,
        total_commission=rest_commission + sum((l.commission for l in lines), Decimal(0)),
        products=lines,
    )


@pytest.fixture
def invoice_factory():
    return make_invoice


@pytest.fixture
def today():
    return date(2024, 3, 15)
