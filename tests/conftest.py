# tests/conftest.py
import os, sys
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("APP_ENV", "test")

from notes_api import create_app
from notes_api.extensions import db
from notes_api.notes.store import NoteStore

@pytest.fixture(scope="session")
def app():
    app = create_app()
    with app.app_context():
        # tables propres pour la session de tests
        db.drop_all()
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()

@pytest.fixture()
def client(app):
    return app.test_client()

@pytest.fixture()
def engine():
    # SQLite en mémoire, une base neuve par test
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.metadata.create_all(engine)
    yield engine
    engine.dispose()

@pytest.fixture()
def store(engine):
    return NoteStore(engine)
