"""
Tests for the document store contract, run against both implementations.
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from errors import ConflictError, NotFoundError, UnderlyingStoreError, ValidationError
from services.document_store import APARTMENTS, USERS, SqlDocumentStore, utcnow


def _apartment(unit, occupants=0, max_occupants=3):
     return {
          "unit_number": unit,
          "rooms": 1,
          "monthly_rent": 800,
          "status": "available",
          "max_occupants": max_occupants,
          "current_occupants": occupants,
     }


class TestDocumentStore:

     def test_create_assigns_id_and_created_at(self, store):
          doc_id = store.create(USERS, {"email": "a@example.com", "role": "tenant"})

          doc = store.get(USERS, doc_id)
          assert isinstance(doc_id, str) and doc_id
          assert doc["id"] == doc_id
          assert isinstance(doc["created_at"], datetime)

     def test_get_missing_returns_none(self, store):
          assert store.get(USERS, "missing") is None

     def test_update_missing_raises(self, store):
          with pytest.raises(NotFoundError):
               store.update(USERS, "missing", {"email": "x@example.com"})

     def test_adjust_occupancy_rederives_status(self, store):
          doc_id = store.create(APARTMENTS, _apartment("1", occupants=1, max_occupants=2))
          now = utcnow()

          full = store.adjust_occupancy(doc_id, 1, now)
          assert full["current_occupants"] == 2
          assert full["status"] == "occupied"
          assert full["updated_at"] == now

          freed = store.adjust_occupancy(doc_id, -1, now)
          assert freed["current_occupants"] == 1
          assert freed["status"] == "available"
          assert store.get(APARTMENTS, doc_id)["status"] == "available"

     def test_adjust_occupancy_floors_at_zero(self, store):
          doc_id = store.create(APARTMENTS, _apartment("1"))

          result = store.adjust_occupancy(doc_id, -1, utcnow())

          assert result["current_occupants"] == 0
          assert result["status"] == "available"

     def test_adjust_occupancy_zero_follows_capacity(self, store):
          doc_id = store.create(APARTMENTS, _apartment("1", occupants=2, max_occupants=3))
          store.update(APARTMENTS, doc_id, {"max_occupants": 2})

          assert store.adjust_occupancy(doc_id, 0, utcnow())["status"] == "occupied"

     def test_adjust_occupancy_missing(self, store):
          with pytest.raises(NotFoundError):
               store.adjust_occupancy("missing", 1, utcnow())

     def test_utcnow_is_naive_utc(self):
          stamp = utcnow()
          assert stamp.tzinfo is None
          assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - stamp) < timedelta(seconds=5)

     def test_query_equal_and_find(self, store):
          store.create(USERS, {"email": "a@example.com", "role": "tenant"})
          store.create(USERS, {"email": "b@example.com", "role": "tenant"})
          store.create(USERS, {"email": "c@example.com", "role": "admin"})

          assert len(store.query_equal(USERS, "role", "tenant")) == 2
          found = store.find(USERS, role="tenant", email="b@example.com")
          assert [doc["email"] for doc in found] == ["b@example.com"]

     @pytest.mark.parametrize("op,value,expected", [
          ("<", 2, {"0", "1"}),
          ("<=", 2, {"0", "1", "2"}),
          (">", 1, {"2", "3"}),
          (">=", 3, {"3"}),
          ("==", 1, {"1"}),
          ("!=", 1, {"0", "2", "3"}),
     ])
     def test_query_range(self, store, op, value, expected):
          for occupants in range(4):
               store.create(APARTMENTS, _apartment(str(occupants), occupants=occupants))

          result = store.query_range(APARTMENTS, "current_occupants", op, value)

          assert {doc["unit_number"] for doc in result} == expected

     def test_unsupported_operator(self, store):
          with pytest.raises(ValidationError):
               store.query_range(APARTMENTS, "current_occupants", "~", 1)

     def test_delete_and_list_all(self, store):
          keep = store.create(APARTMENTS, _apartment("keep"))
          drop = store.create(APARTMENTS, _apartment("drop"))

          store.delete(APARTMENTS, drop)

          assert [doc["id"] for doc in store.list_all(APARTMENTS)] == [keep]


class TestSqlDocumentStore:

     def test_unknown_collection(self, sql_store):
          with pytest.raises(ValidationError):
               sql_store.get("buildings", "x")

     def test_unknown_field(self, sql_store):
          with pytest.raises(ValidationError):
               sql_store.create(USERS, {"nickname": "x"})

     def test_store_failures_are_wrapped(self):
          def broken_session():
               raise OperationalError("SELECT 1", {}, Exception("connection refused"))

          store = SqlDocumentStore(broken_session)
          with pytest.raises(UnderlyingStoreError) as exc_info:
               store.get(USERS, "x")
          assert isinstance(exc_info.value.__cause__, OperationalError)

     def test_unique_violation_is_a_conflict(self, sql_store):
          sql_store.create(APARTMENTS, _apartment("dup"))
          with pytest.raises(ConflictError) as exc_info:
               sql_store.create(APARTMENTS, _apartment("dup"))
          assert exc_info.value.status_code == 409
          assert len(sql_store.query_equal(APARTMENTS, "unit_number", "dup")) == 1
