# services/document_store.py
"""
Document store - key-addressed access to the tenancy collections.

Services never talk to the ORM directly; they receive a DocumentStore and
work with plain dict documents. Each write is committed on its own, there
is no multi-document transaction.
"""
import abc
import logging
import operator
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from sqlalchemy import case, select, update, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from errors import ConflictError, NotFoundError, UnderlyingStoreError, ValidationError
from models import Apartment, ApartmentStatus, Lease, TenantApartment, User, new_id

logger = logging.getLogger(__name__)

APARTMENTS = "apartments"
TENANT_APARTMENTS = "tenant_apartments"
USERS = "users"
LEASES = "leases"

COLLECTIONS = {
     APARTMENTS: Apartment,
     TENANT_APARTMENTS: TenantApartment,
     USERS: User,
     LEASES: Lease,
}

RANGE_OPERATORS: dict[str, Callable[[Any, Any], Any]] = {
     "<": operator.lt,
     "<=": operator.le,
     ">": operator.gt,
     ">=": operator.ge,
     "==": operator.eq,
     "!=": operator.ne,
}


def utcnow() -> datetime:
     """Naive UTC timestamp, matching the DateTime columns."""
     return datetime.now(timezone.utc).replace(tzinfo=None)


class DocumentStore(abc.ABC):
     """
     Generic document-store client.

     Documents are dicts carrying their key under "id". Missing documents
     read as None; failures of the backing service raise UnderlyingStoreError
     and writes rejected by a uniqueness or check constraint raise ConflictError.
     """

     @abc.abstractmethod
     def get(self, collection: str, doc_id: str) -> Optional[dict]:
          ...

     @abc.abstractmethod
     def create(self, collection: str, data: dict) -> str:
          """Insert a document and return its id. `created_at` is stamped when absent."""

     @abc.abstractmethod
     def update(self, collection: str, doc_id: str, data: dict) -> None:
          """Apply a partial update; raises NotFoundError if the document is missing."""

     @abc.abstractmethod
     def delete(self, collection: str, doc_id: str) -> None:
          ...

     @abc.abstractmethod
     def find(self, collection: str, **equals: Any) -> list[dict]:
          """Documents whose fields equal every given value."""

     @abc.abstractmethod
     def query_range(self, collection: str, field: str, op: str, value: Any) -> list[dict]:
          ...

     @abc.abstractmethod
     def list_all(self, collection: str) -> list[dict]:
          ...

     @abc.abstractmethod
     def adjust_occupancy(self, apartment_id: str, amount: int, updated_at: datetime) -> dict:
          """
          Add `amount` to an apartment's current_occupants in a single write.

          The count is floored at 0 and status is re-derived from the new count
          and max_occupants in that same write, so concurrent adjustments
          cannot leave status out of step with occupancy. Returns the updated
          apartment; raises NotFoundError if it does not exist.
          """

     def query_equal(self, collection: str, field: str, value: Any) -> list[dict]:
          return self.find(collection, **{field: value})


class SqlDocumentStore(DocumentStore):
     """
     DocumentStore backed by the SQLAlchemy models.

     Every call runs in its own session and commits on success, so a
     sequence of calls behaves like independent remote writes.
     """

     def __init__(self, session_factory: Callable[[], Session]):
          self._session_factory = session_factory

     # ------------------------------------------------------------------
     # helpers
     # ------------------------------------------------------------------

     @staticmethod
     def _model(collection: str):
          try:
               return COLLECTIONS[collection]
          except KeyError:
               raise ValidationError(f"Unknown collection '{collection}'")

     @staticmethod
     def _column(model, field: str):
          if field not in model.field_names():
               raise ValidationError(f"Unknown field '{field}' for {model.__tablename__}")
          return getattr(model, field)

     @staticmethod
     def _to_document(row) -> dict:
          return {name: getattr(row, name) for name in row.field_names()}

     def _run(self, action: str, collection: str, work: Callable[[Session], Any]) -> Any:
          try:
               with self._session_factory() as session:
                    with session.begin():
                         return work(session)
          except IntegrityError as exc:
               logger.warning("Store %s on %s rejected: %s", action, collection, exc.orig)
               raise ConflictError(f"Store {action} on {collection} conflicts with existing data") from exc
          except SQLAlchemyError as exc:
               logger.error("Store %s on %s failed: %s", action, collection, exc)
               raise UnderlyingStoreError(f"Store {action} on {collection} failed: {exc}") from exc

     # ------------------------------------------------------------------
     # DocumentStore
     # ------------------------------------------------------------------

     def get(self, collection: str, doc_id: str) -> Optional[dict]:
          model = self._model(collection)

          def work(session: Session):
               row = session.get(model, doc_id)
               return self._to_document(row) if row is not None else None

          return self._run("get", collection, work)

     def create(self, collection: str, data: dict) -> str:
          model = self._model(collection)
          values = dict(data)
          for field in values:
               self._column(model, field)
          values.setdefault("id", new_id())
          if "created_at" in model.field_names() and values.get("created_at") is None:
               values["created_at"] = utcnow()

          def work(session: Session):
               session.add(model(**values))
               return values["id"]

          return self._run("create", collection, work)

     def update(self, collection: str, doc_id: str, data: dict) -> None:
          model = self._model(collection)
          values = dict(data)
          for field in values:
               self._column(model, field)

          def work(session: Session):
               result = session.execute(
                    update(model)
                    .where(model.id == doc_id)
                    .values(**values)
                    .execution_options(synchronize_session=False)
               )
               return result.rowcount

          if self._run("update", collection, work) == 0:
               raise NotFoundError(f"Document {doc_id} not found in {collection}")

     def delete(self, collection: str, doc_id: str) -> None:
          model = self._model(collection)
          self._run(
               "delete",
               collection,
               lambda session: session.execute(
                    delete(model).where(model.id == doc_id).execution_options(synchronize_session=False)
               ),
          )

     def find(self, collection: str, **equals: Any) -> list[dict]:
          model = self._model(collection)
          clauses = [self._column(model, field) == value for field, value in equals.items()]
          return self._select(collection, model, clauses)

     def query_range(self, collection: str, field: str, op: str, value: Any) -> list[dict]:
          model = self._model(collection)
          if op not in RANGE_OPERATORS:
               raise ValidationError(f"Unsupported operator '{op}'")
          clause = RANGE_OPERATORS[op](self._column(model, field), value)
          return self._select(collection, model, [clause])

     def list_all(self, collection: str) -> list[dict]:
          model = self._model(collection)
          return self._select(collection, model, [])

     def adjust_occupancy(self, apartment_id: str, amount: int, updated_at: datetime) -> dict:
          # SET expressions read the row as it was before the statement
          count = Apartment.current_occupants + amount
          new_count = case((count < 0, 0), else_=count)
          status = case(
               (new_count >= Apartment.max_occupants, ApartmentStatus.OCCUPIED.value),
               else_=ApartmentStatus.AVAILABLE.value,
          )

          def work(session: Session):
               result = session.execute(
                    update(Apartment)
                    .where(Apartment.id == apartment_id)
                    .values(current_occupants=new_count, status=status, updated_at=updated_at)
                    .execution_options(synchronize_session=False)
               )
               if result.rowcount == 0:
                    return None
               return self._to_document(session.get(Apartment, apartment_id))

          apartment = self._run("update", APARTMENTS, work)
          if apartment is None:
               raise NotFoundError(f"Document {apartment_id} not found in {APARTMENTS}")
          return apartment

     def _select(self, collection: str, model, clauses: list) -> list[dict]:
          def work(session: Session):
               statement = select(model)
               if clauses:
                    statement = statement.where(*clauses)
               rows = session.execute(statement).scalars().all()
               return [self._to_document(row) for row in rows]

          return self._run("query", collection, work)
