"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite, foreign keys on)
- FastAPI test client
- Seed data: four companies, three jobs, three users and an admin
- Bearer headers for a regular user and an admin
"""

import os

# Must be set before the app's settings are imported
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")


import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, get_db
from jobly.core.security import create_token, get_password_hash
from jobly.models import Company, Job, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores REFERENCES / ON DELETE CASCADE unless asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


DEFAULT_COMPANIES = [
    {"handle": "c1", "name": "C1", "description": "Desc1", "num_employees": 1, "logo_url": "http://c1.img"},
    {"handle": "c2", "name": "C2", "description": "Desc2", "num_employees": 2, "logo_url": "http://c2.img"},
    {"handle": "c3", "name": "C3", "description": "Desc3", "num_employees": 3, "logo_url": "http://c3.img"},
    {"handle": "c4", "name": "C4", "description": "Desc4", "num_employees": 4, "logo_url": "http://c4.img"},
]

USERS = [
    ("u1", "password1", "U1F", "U1L", "u1@email.com", False),
    ("u2", "password2", "U2F", "U2L", "u2@email.com", False),
    ("u3", "password3", "U3F", "U3L", "u3@email.com", False),
    ("admin1", "adminpassword", "Admin1", "User", "admin@user.com", True),
]


@pytest.fixture
def seed_companies(db_session):
    """Insert company rows; defaults to c1..c4 with 1..4 employees."""
    def _seed(companies=DEFAULT_COMPANIES):
        db_session.add_all([Company(**data) for data in companies])
        db_session.commit()

    return _seed


@pytest.fixture
def seeded(db_session, seed_companies):
    """
    Seed companies c1..c4, three jobs and four users.

    Returns the job ids in insertion order:
        0: Retail Pharmacist   100000 equity 0.01 c1
        1: Hospital Pharmacist 150000 equity 0    c2
        2: Nuclear Physicist   200000 no equity   c3
    """
    seed_companies()

    jobs = [
        Job(title="Retail Pharmacist", salary=100000, equity="0.01", company_handle="c1"),
        Job(title="Hospital Pharmacist", salary=150000, equity="0", company_handle="c2"),
        Job(title="Nuclear Physicist", salary=200000, equity=None, company_handle="c3"),
    ]
    db_session.add_all(jobs)

    db_session.add_all([
        User(
            username=username,
            password=get_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            email=email,
            is_admin=is_admin,
        )
        for username, password, first_name, last_name, email, is_admin in USERS
    ])
    db_session.commit()

    return [job.id for job in jobs]


@pytest.fixture
def u1_headers():
    """Bearer header for the regular user u1"""
    token = create_token({"username": "u1", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    """Bearer header for the admin admin1"""
    token = create_token({"username": "admin1", "isAdmin": True})
    return {"Authorization": f"Bearer {token}"}
