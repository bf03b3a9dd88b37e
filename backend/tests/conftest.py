import os

# Settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ird_properties.main import app
from ird_properties.core.database import Base, get_db
from ird_properties.core.security import get_password_hash
from ird_properties.models.user import User, UserRole
from ird_properties.models.property import PropertyType
from ird_properties.services.ledger import InventoryLedger

# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "password123"


def get_auth_headers(client: TestClient, username: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Log in and return bearer headers for the given user."""
    response = client.post(
        "/api/v1/auth/login",
        data={"username": username, "password": password},
    )
    assert response.status_code == 200, response.text
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


def make_user(db, username: str, role: UserRole, name: str, department: str = "ADRD",
              is_active: bool = True) -> User:
    user = User(
        username=username,
        hashed_password=get_password_hash(DEFAULT_PASSWORD),
        name=name,
        role=role.value,
        department=department,
        email=f"{username}@example.com",
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_property(db, number: str = "IRD-0001", quantity: int = 10,
                  property_type: PropertyType = PropertyType.PERMANENT, **overrides):
    fields = dict(
        number=number,
        name="Laptop Computer",
        model_number="HP ProBook 450",
        model_19_number="M19-0001",
        serial_number="5CD1234XYZ",
        date="2024-01-15",
        company_name="Tech Supplies PLC",
        measurement="pcs",
        quantity=quantity,
        unit_price=100.0,
        property_type=property_type,
    )
    fields.update(overrides)
    prop = InventoryLedger(db).register(**fields)
    db.commit()
    db.refresh(prop)
    return prop


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def admin_user(db_session):
    """Approver: approves, adjusts and rejects requests."""
    return make_user(db_session, "admin", UserRole.ADMIN, "Administrator", "Property Office")


@pytest.fixture(scope="function")
def requester_user(db_session):
    """Requester: submits property requests."""
    return make_user(db_session, "requester", UserRole.USER, "Sidrak H.", "ADRD")


@pytest.fixture(scope="function")
def other_requester(db_session):
    return make_user(db_session, "requester2", UserRole.USER, "Second Requester", "Finance")


@pytest.fixture(scope="function")
def store_manager_user(db_session):
    """Issuer: issues approved requests from the store."""
    return make_user(db_session, "store", UserRole.STORE_MANAGER, "Store Manager", "Store Department")


@pytest.fixture(scope="function")
def test_property(db_session):
    """Permanent property with 10 units, all available."""
    return make_property(db_session)


@pytest.fixture(scope="function")
def admin_headers(client, admin_user):
    return get_auth_headers(client, admin_user.username)


@pytest.fixture(scope="function")
def requester_headers(client, requester_user):
    return get_auth_headers(client, requester_user.username)


@pytest.fixture(scope="function")
def store_headers(client, store_manager_user):
    return get_auth_headers(client, store_manager_user.username)
