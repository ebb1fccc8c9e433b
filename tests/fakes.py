"""In-memory DocumentStore used as a test double."""
import copy
from typing import Any, Optional

from errors import NotFoundError, ValidationError
from models import derive_status, new_id
from services.document_store import APARTMENTS, COLLECTIONS, RANGE_OPERATORS, DocumentStore, utcnow


class InMemoryDocumentStore(DocumentStore):
     """Dict-backed store with the same contract as SqlDocumentStore."""

     def __init__(self):
          self.collections: dict[str, dict[str, dict]] = {name: {} for name in COLLECTIONS}

     def _docs(self, collection: str) -> dict[str, dict]:
          if collection not in self.collections:
               raise ValidationError(f"Unknown collection '{collection}'")
          return self.collections[collection]

     def get(self, collection: str, doc_id: str) -> Optional[dict]:
          doc = self._docs(collection).get(doc_id)
          return copy.deepcopy(doc) if doc is not None else None

     def create(self, collection: str, data: dict) -> str:
          doc = copy.deepcopy(data)
          doc.setdefault("id", new_id())
          if doc.get("created_at") is None:
               doc["created_at"] = utcnow()
          self._docs(collection)[doc["id"]] = doc
          return doc["id"]

     def update(self, collection: str, doc_id: str, data: dict) -> None:
          docs = self._docs(collection)
          if doc_id not in docs:
               raise NotFoundError(f"Document {doc_id} not found in {collection}")
          docs[doc_id].update(copy.deepcopy(data))

     def delete(self, collection: str, doc_id: str) -> None:
          self._docs(collection).pop(doc_id, None)

     def find(self, collection: str, **equals: Any) -> list[dict]:
          return [
               copy.deepcopy(doc) for doc in self._docs(collection).values()
               if all(doc.get(field) == value for field, value in equals.items())
          ]

     def query_range(self, collection: str, field: str, op: str, value: Any) -> list[dict]:
          if op not in RANGE_OPERATORS:
               raise ValidationError(f"Unsupported operator '{op}'")
          compare = RANGE_OPERATORS[op]
          return [
               copy.deepcopy(doc) for doc in self._docs(collection).values()
               if doc.get(field) is not None and compare(doc[field], value)
          ]

     def list_all(self, collection: str) -> list[dict]:
          return [copy.deepcopy(doc) for doc in self._docs(collection).values()]

     def adjust_occupancy(self, apartment_id: str, amount: int, updated_at) -> dict:
          apartment = self._docs(APARTMENTS).get(apartment_id)
          if apartment is None:
               raise NotFoundError(f"Document {apartment_id} not found in {APARTMENTS}")
          count = max(apartment["current_occupants"] + amount, 0)
          apartment.update({
               "current_occupants": count,
               "status": derive_status(count, apartment["max_occupants"]),
               "updated_at": updated_at,
          })
          return copy.deepcopy(apartment)
