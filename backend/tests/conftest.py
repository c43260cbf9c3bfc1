"""
Pytest fixtures for bakery POS backend tests.

Provides the application, a store cleared before every test, the core
container, and a small stocked catalog.
"""

import pytest

from bakery_pos import create_app
from bakery_pos.core import get_core
from bakery_pos.extensions import db
from bakery_pos.models import PosRecord


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'POS_SEED_SAMPLE_DATA': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Empty store for each test."""
    db.session.query(PosRecord).delete()
    db.session.commit()

    yield db.session

    db.session.rollback()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def core(app, db_session):
    return get_core()


@pytest.fixture(scope='function')
def catalog(core):
    """Bread 1000 x 20, Cake 5000 x 2, Cookie 300 x 1, keyed by name."""
    products = {}
    for name, price, quantity in [("Bread", 1000, 20), ("Cake", 5000, 2), ("Cookie", 300, 1)]:
        product, _ = core.inventory.add_or_restock(name, price, quantity)
        products[name] = product
    return products


@pytest.fixture(scope='function')
def open_shift(core):
    return core.shifts.start()
