import os

# Settings are read at import time, so point them at a throwaway database
# before anything from vinheria is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ACCESS_TOKEN"] = "test-access-token"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from vinheria.core.database import Base, SessionLocal, engine, init_db



@pytest.fixture
def db():
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db):
    from vinheria.services.inventory_ledger import inventory_ledger

    inventory_ledger.seed_if_empty(db)
    return db


@pytest.fixture
def client(seeded_db):
    from vinheria.main import app

    # No context manager: the lifespan (scheduler, file database) stays off
    return TestClient(app, follow_redirects=False)
