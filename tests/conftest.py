"""
Shared test fixtures.

Service tests run twice: against the SQLite-backed SqlDocumentStore and
against the in-memory double.
"""
import os
from decimal import Decimal

# Configure test environment BEFORE importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models import Base
from services.apartment_service import ApartmentService
from services.document_store import APARTMENTS, USERS, SqlDocumentStore
from services.lease_service import LeaseService
from services.tenancy_coordinator import TenancyCoordinator
from tests.fakes import InMemoryDocumentStore


@pytest.fixture
def sql_store():
     engine = create_engine(
          "sqlite://",
          connect_args={"check_same_thread": False},
          poolclass=StaticPool,
     )
     Base.metadata.create_all(engine)
     SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
     yield SqlDocumentStore(SessionLocal)
     Base.metadata.drop_all(engine)
     engine.dispose()


@pytest.fixture(params=["sql", "memory"])
def store(request):
     if request.param == "sql":
          return request.getfixturevalue("sql_store")
     return InMemoryDocumentStore()


@pytest.fixture
def coordinator(store):
     return TenancyCoordinator(store)


@pytest.fixture
def apartment_service(store):
     return ApartmentService(store)


@pytest.fixture
def lease_service(store, coordinator):
     return LeaseService(store, coordinator)


@pytest.fixture
def make_apartment(store):
     """Insert an apartment document directly, bypassing service validation."""
     counter = {"n": 0}

     def _make(**overrides):
          counter["n"] += 1
          data = {
               "building_name": "Maple Court",
               "unit_number": f"U-{counter['n']:03d}",
               "floor": 1,
               "rooms": 2,
               "status": "available",
               "monthly_rent": Decimal("1200.00"),
               "amenities": ["parking"],
               "max_occupants": 3,
               "current_occupants": 0,
          }
          data.update(overrides)
          return store.create(APARTMENTS, data)

     return _make


@pytest.fixture
def make_user(store):
     counter = {"n": 0}

     def _make(**overrides):
          counter["n"] += 1
          data = {
               "email": f"tenant{counter['n']}@example.com",
               "first_name": "Test",
               "last_name": f"Tenant{counter['n']}",
               "role": "tenant",
               "apartment_id": None,
               "lease_start_date": None,
               "lease_end_date": None,
          }
          data.update(overrides)
          return store.create(USERS, data)

     return _make


@pytest.fixture
def record_writes(monkeypatch):
     """Patch a store so every write is recorded, then passed through."""

     def _record(target):
          calls = []
          for name in ("create", "update", "delete", "adjust_occupancy"):
               original = getattr(target, name)

               def recorder(*args, _name=name, _original=original, **kwargs):
                    calls.append((_name, args))
                    return _original(*args, **kwargs)

               monkeypatch.setattr(target, name, recorder)
          return calls

     return _record
