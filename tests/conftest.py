import os

# High rate limit, no response cache, no demo roster, no real e-mail
os.environ["RATE_LIMIT_PER_MINUTE"] = "10000"
os.environ["CACHE_TTL_SECONDS"] = "0"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["EMAIL_API_KEY"] = ""
os.environ["LOG_FILE"] = "logs/test.log"

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from intouch.core.security import get_password_hash
from intouch.db.database import Base, get_db
from intouch.db.models import SpecialistType, UserRole
from intouch.db.repository import SqlMarketplaceRepository
from intouch.schemas.specialist import SpecialistListing, SpecialistProfileCreate
from intouch.services.specialist_search import search_sessions
from main import app

TEST_PASSWORD = "Secret123!"

# Use in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_listing(
    email: str,
    type: SpecialistType = SpecialistType.INDIVIDUAL,
    categories: Optional[List[str]] = None,
    locations: Optional[List[str]] = None,
    services: Optional[List[str]] = None,
    profession: str = "",
    **owner: Any,
) -> SpecialistListing:
    """Roster entry for engine tests; owner names default from the e-mail"""
    local = email.split("@")[0]
    if type == SpecialistType.BUSINESS:
        owner.setdefault("company_name", local.upper())
    else:
        owner.setdefault("first_name", local.capitalize())
        owner.setdefault("last_name", "Testas")
    return SpecialistListing(
        user_id=f"user_{local}",
        type=type,
        email=email,
        profession=profession,
        categories=categories or [],
        locations=locations or [],
        services=services or [],
        **owner,
    )


@pytest.fixture(scope="function")
def db():
    # Create the database and tables
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Clean up after the test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    # Override the get_db dependency to use the test database
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    # Reset the dependency override and any open searches
    app.dependency_overrides = {}
    search_sessions.clear()


@pytest.fixture(scope="function")
def repo(db):
    return SqlMarketplaceRepository(db)


@pytest.fixture(scope="function")
def test_customer(repo):
    return repo.create({
        "email": "petras@example.com",
        "password_hash": get_password_hash(TEST_PASSWORD),
        "role": UserRole.CUSTOMER,
        "first_name": "Petras",
        "last_name": "Klientas",
    })


def create_specialist(repo, email: str, **profile: Any):
    """Create a specialist user and listing through the repository"""
    specialist_type = profile.pop("type", SpecialistType.INDIVIDUAL)
    owner: Dict[str, Any] = {
        "email": email,
        "password_hash": get_password_hash(TEST_PASSWORD),
    }
    if specialist_type == SpecialistType.BUSINESS:
        owner.update(role=UserRole.BUSINESS_SPECIALIST, company_name=profile.pop("company_name", "UAB Testas"),
                     company_code="300000000")
    else:
        owner.update(role=UserRole.INDIVIDUAL_SPECIALIST, first_name=profile.pop("first_name", "Jonas"),
                     last_name=profile.pop("last_name", "Petraitis"))
    user = repo.create(owner)
    repo.create_profile(SpecialistProfileCreate(user_id=user.id, type=specialist_type, **profile))
    return user


@pytest.fixture(scope="function")
def test_specialists(repo):
    """Two individuals and one business, in roster order"""
    return [
        create_specialist(
            repo, "jonas@example.com",
            profession="Santechnikas",
            categories=["Statyba, remontas, medžiagos, NT"],
            locations=[],
            services=["Santechnikos darbai"],
        ),
        create_specialist(
            repo, "ona@example.com",
            first_name="Ona", last_name="Programuotoja",
            profession="Programuotoja",
            categories=["Kompiuteriai, IT technologijos"],
            locations=["Kaunas"],
            services=["Programinės įrangos kūrimas"],
        ),
        create_specialist(
            repo, "uab@example.com",
            type=SpecialistType.BUSINESS,
            company_name="UAB Stats",
            profession="Elektrikai",
            categories=["Statyba, remontas, medžiagos, NT"],
            locations=["Vilnius"],
            services=["Elektros darbai"],
        ),
    ]


def login(client: TestClient, email: str, password: str = TEST_PASSWORD) -> Dict[str, str]:
    response = client.post("/v1/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture(scope="function")
def customer_headers(client, test_customer, test_specialists):
    return login(client, test_customer.email)


@pytest.fixture(scope="function")
def specialist_headers(client, test_specialists):
    return login(client, test_specialists[0].email)


@pytest.fixture(scope="function")
def authorized_client(client, customer_headers):
    client.headers.update(customer_headers)
    yield client
