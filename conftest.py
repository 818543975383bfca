"""Fixtures shared by the backend and frontend tests"""
import os

# must be set before the backend module creates its engine
os.environ.setdefault('DATABASE_URL', 'sqlite://')

import pytest
from sqlalchemy.orm import sessionmaker

from backend.app.database import Base, get_db, make_engine, session_dependency
from backend.app.main import app as backend_app


@pytest.fixture
def db_engine():
    engine = make_engine('sqlite://')
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def backend(db_engine):
    """The FastAPI app with get_db pointed at a fresh in-memory database"""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    backend_app.dependency_overrides[get_db] = session_dependency(TestingSession)
    yield backend_app
    backend_app.dependency_overrides.clear()
