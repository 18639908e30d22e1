"""
Pytest configuration and fixtures for the booking API tests

Every test gets its own SQLite database file; the app's lifespan creates the
tables, so all database work runs on the TestClient's event loop.
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from boom_booking.config import Settings  # noqa: E402
from boom_booking.database import Database  # noqa: E402
from main import create_app  # noqa: E402

BOOKING_DAY = "2030-01-15"


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        "auto_create_tables": True,
        "app_domain": "localhost",
        "environment": "test",
        "debug": False,
        "api_base_url": None,
        "websocket_url": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def client(settings):
    app = create_app(settings=settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def database(tmp_path):
    """A bare Database for service-level tests."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'service.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.sessionmaker() as db:
        yield db


def create_tenant(client, subdomain="demo-karaoke", plan_type="free", name=None) -> dict:
    response = client.post(
        "/api/tenants",
        json={"name": name or f"{subdomain} business", "subdomain": subdomain, "plan_type": plan_type},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def create_room(client, tenant_id, name="Room A", capacity=4, category="Standard", price_per_hour=25) -> dict:
    response = client.post(
        "/api/rooms",
        params={"tenant_id": tenant_id},
        json={"name": name, "capacity": capacity, "category": category, "price_per_hour": price_per_hour},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def booking_payload(room_id, start="18:00", end="20:00", day=BOOKING_DAY, **extra) -> dict:
    payload = {
        "room_id": room_id,
        "customer_name": "Jamie Singer",
        "start_time": f"{day}T{start}:00",
        "end_time": f"{day}T{end}:00",
    }
    payload.update(extra)
    return payload


@pytest.fixture
def tenant(client):
    return create_tenant(client, subdomain="sing-along", plan_type="pro")


@pytest.fixture
def room(client, tenant):
    return create_room(client, tenant["id"])
