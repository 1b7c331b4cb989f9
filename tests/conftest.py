import os
import tempfile

# Configuration is read at import time, so it has to be in place before app imports
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["DB_TYPE"] = "sqlite"
_DB_FILE = os.path.join(tempfile.gettempdir(), f"car_rental_test_{os.getpid()}.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_FILE}"

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.db import AsyncSessionLocal, Base, engine
from app.models.user_models import User
from app.schemas.rental_schemas.coupon_schemas import CouponTerms
from app.utils.get_user import get_current_user
from main import app


def _make_coupon(**overrides) -> CouponTerms:
    data = {
        "code": "TEST10",
        "discount_type": "percentage",
        "discount_value": Decimal("10"),
        "expires_at": datetime.now(timezone.utc) + timedelta(days=30),
        "active": True,
        "usage_limit": None,
        "usage_count": 0,
        "min_days": None,
    }
    data.update(overrides)
    return CouponTerms(**data)


@pytest.fixture
def make_coupon():
    return _make_coupon


@pytest.fixture
async def db_setup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def users(db_setup):
    async with AsyncSessionLocal() as session:
        admin = User(username="admin@example.com", password_hash="not-used", role="admin")
        customer = User(username="driver@example.com", password_hash="not-used", role="customer")
        other = User(username="other@example.com", password_hash="not-used", role="customer")
        session.add_all([admin, customer, other])
        await session.commit()
    return {"admin": admin, "customer": customer, "other": other}


@pytest.fixture
def act_as():
    def _act_as(user):
        app.dependency_overrides[get_current_user] = lambda: user
    yield _act_as
    app.dependency_overrides.clear()


@pytest.fixture
async def client(users):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def pytest_sessionfinish(session, exitstatus):
    if os.path.exists(_DB_FILE):
        os.remove(_DB_FILE)
