import pytest

from app import create_app
from config import TestingConfig
from models import db


@pytest.fixture
def app():
    """A fresh app bound to its own in-memory database for each test."""
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def other_client(app):
    # separate cookie jar, so a second teacher can be logged in at the same time
    return app.test_client()
