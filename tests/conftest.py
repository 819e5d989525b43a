from datetime import datetime, timedelta

import pytest

from screentime_api import create_app
from screentime_api.extensions import db
from screentime_api.services import store

T0 = datetime(2024, 1, 1, 12, 0, 0)


def _at(minutes: int) -> datetime:
    return T0 + timedelta(minutes=minutes)


@pytest.fixture(scope="function")
def app():
    app = create_app(SQLALCHEMY_DATABASE_URI="sqlite:///:memory:", TESTING=True)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope="function")
def session(app):
    yield db.session


@pytest.fixture(scope="function")
def client(app):
    return app.test_client()


@pytest.fixture(scope="function")
def runner(app):
    return app.test_cli_runner()


@pytest.fixture(scope="function")
def types(app):
    """Adjustment types keyed by their delta: -1, +2, -5, +3."""
    return {
        d: store.add_adjustment_type(f"delta {d:+d}", d)
        for d in (-1, 2, -5, 3)
    }


@pytest.fixture
def at():
    """`at(n)` is a fixed timestamp n minutes after T0, for deterministic ordering."""
    return _at
