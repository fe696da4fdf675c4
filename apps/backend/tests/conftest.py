import pytest
import sys
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure backend path is in sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from database import Base, get_db, PeriodDB, SubjectDB, TeacherDB
from main import app

# Use in-memory DB for tests with StaticPool to share connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

CATALOG = ["08:00-09:30", "09:30-11:00"]

@pytest.fixture
def engine():
    """Fresh in-memory database per test so commits and rollbacks are real."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture
def db_session(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()

@pytest.fixture
def seeded(db_session):
    """Two catalog periods, subjects 1-2 and teachers 10-11."""
    for position, name in enumerate(CATALOG):
        db_session.add(PeriodDB(name=name, position=position))
    db_session.add_all([
        SubjectDB(id=1, name="Math"),
        SubjectDB(id=2, name="Physics"),
        TeacherDB(id=10, name="Alice"),
        TeacherDB(id=11, name="Bob"),
    ])
    db_session.commit()
    return db_session

@pytest.fixture
def client(seeded):
    """Test client with overridden dependency."""
    def override_get_db():
        try:
            yield seeded
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    from fastapi.testclient import TestClient
    yield TestClient(app)
    del app.dependency_overrides[get_db]

