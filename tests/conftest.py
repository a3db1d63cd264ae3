"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database, an ``httpx`` client wired
to the FastAPI app with ``get_db`` pointed at that database, and (on request)
a seeded catalog plus a signed-in client.
"""
import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["BCRYPT_ROUNDS"] = "4"

from decimal import Decimal
from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import (
    CarModel,
    Customer,
    Product,
    ProductCategory,
    ProductCompany,
    ProductSubcategory,
    State,
    Vendor,
)
from app.services.user_service import UserService


TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def seed(session_factory):
    """
    A user, a state, catalog lookups, two products (ids 55 and 56), one
    customer and one vendor.
    """
    async with session_factory() as session:
        user = await UserService(session).create_user(ADMIN_USERNAME, "admin@example.com", ADMIN_PASSWORD)

        state = State(state_name="Punjab", code=3)
        category = ProductCategory(category_name="Brake Parts")
        subcategory = ProductSubcategory(subcategory_name="Pads")
        company = ProductCompany(company_name="Bosch")
        swift = CarModel(model_name="Swift")
        city = CarModel(model_name="City")
        session.add_all([state, category, subcategory, company, swift, city])
        await session.flush()

        brake_pad = Product(
            id=55,
            product_name="Brake Pad Set",
            display_name="Brake Pad Set",
            part_no="BP-100",
            product_category_id=category.id,
            product_subcategory_id=subcategory.id,
            company_id=company.id,
            car_model_ids=f"{swift.id},{city.id}",
            stock=10,
            min_stock=5,
            rate=Decimal("500.00"),
            hsn="8708",
        )
        oil_filter = Product(
            id=56,
            product_name="Oil Filter",
            part_no="OF-200",
            company_id=company.id,
            car_model_ids=str(city.id),
            stock=1,
            min_stock=3,
            rate=Decimal("150.00"),
            hsn="8421",
        )
        customer = Customer(
            billing_name="Kumar Motors",
            billing_address="GT Road, Ludhiana",
            billing_state_id=state.id,
            billing_state_code=3,
            billing_gstin="03AAAAA0000A1Z5",
            contact_no="9876543210",
        )
        vendor = Vendor(
            vendor_name="Sharma Auto Traders",
            address="Industrial Area, Jalandhar",
            state_id=state.id,
            state_code=3,
            contact_no="9812345678",
            email="sales@sharmaauto.example",
            tax_id="03ABCDE1234F1Z5",
        )
        session.add_all([brake_pad, oil_filter, customer, vendor])
        await session.commit()

        return SimpleNamespace(
            user_id=user.id,
            state_id=state.id,
            category_id=category.id,
            subcategory_id=subcategory.id,
            company_id=company.id,
            swift_id=swift.id,
            city_id=city.id,
            brake_pad_id=brake_pad.id,
            oil_filter_id=oil_filter.id,
            customer_id=customer.id,
            vendor_id=vendor.id,
        )


@pytest.fixture
async def auth_client(client, seed):
    """The test client carrying a bearer token for the seeded admin."""
    response = await client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    client.headers["Authorization"] = f"Bearer {response.json()['access_token']}"
    return client
