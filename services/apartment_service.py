# services/apartment_service.py
"""
Apartment Service - business rules for apartment documents.

Apartment status is not independently settable: it is derived from the
occupant count and rewritten by every write that changes occupancy or
capacity.
"""
import logging
from typing import Any, Callable, Optional

from errors import ConflictError, NotFoundError, ValidationError
from models import TenancyStatus, derive_status
from services.document_store import APARTMENTS, TENANT_APARTMENTS, DocumentStore, utcnow
from services.validation import require_positive_amount, require_positive_int

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("unit_number", "rooms", "monthly_rent", "max_occupants")
EDITABLE_FIELDS = (
     "building_name",
     "unit_number",
     "floor",
     "rooms",
     "monthly_rent",
     "amenities",
     "max_occupants",
)
DERIVED_FIELDS = ("status", "current_occupants")


def _normalize_amenities(amenities: Any) -> list[str]:
     if amenities is None:
          return []
     if isinstance(amenities, str) or not all(isinstance(item, str) for item in amenities):
          raise ValidationError("Invalid amenities: must be a list of strings")
     return sorted(set(amenities))


class ApartmentService:
     """Service class for apartment CRUD with validation."""

     def __init__(self, store: DocumentStore, clock: Callable = utcnow):
          self.store = store
          self.clock = clock

     def _validate_fields(self, data: dict) -> dict:
          cleaned = dict(data)
          if "unit_number" in cleaned:
               unit_number = cleaned["unit_number"]
               if not isinstance(unit_number, str) or not unit_number.strip():
                    raise ValidationError("Invalid unit number")
               cleaned["unit_number"] = unit_number.strip()
          if cleaned.get("floor") is not None:
               cleaned["floor"] = require_positive_int(cleaned["floor"], "floor number")
          if "rooms" in cleaned:
               cleaned["rooms"] = require_positive_int(cleaned["rooms"], "number of rooms")
          if "monthly_rent" in cleaned:
               cleaned["monthly_rent"] = require_positive_amount(cleaned["monthly_rent"], "monthly rent")
          if "max_occupants" in cleaned:
               cleaned["max_occupants"] = require_positive_int(cleaned["max_occupants"], "maximum occupants")
          if "amenities" in cleaned:
               cleaned["amenities"] = _normalize_amenities(cleaned["amenities"])
          return cleaned

     def _ensure_unique_unit(self, unit_number: str, apartment_id: Optional[str] = None) -> None:
          for existing in self.store.query_equal(APARTMENTS, "unit_number", unit_number):
               if existing["id"] != apartment_id:
                    raise ConflictError("Apartment with this unit number already exists")

     def create_apartment(self, data: dict) -> dict:
          """
          Create a new apartment with no occupants.

          Raises:
               ValidationError: missing required fields or non-positive numbers
               ConflictError: unit number already used by another apartment
          """
          missing = [field for field in REQUIRED_FIELDS if data.get(field) in (None, "")]
          if missing:
               raise ValidationError(f"Missing required fields: {', '.join(missing)}")
          unknown = set(data) - set(EDITABLE_FIELDS)
          if unknown:
               raise ValidationError(f"Unknown apartment fields: {', '.join(sorted(unknown))}")

          apartment = self._validate_fields(data)
          apartment.setdefault("amenities", [])
          self._ensure_unique_unit(apartment["unit_number"])

          now = self.clock()
          apartment.update(
               current_occupants=0,
               status=derive_status(0, apartment["max_occupants"]),
               created_at=now,
               updated_at=now,
          )
          apartment_id = self.store.create(APARTMENTS, apartment)
          logger.info("Created apartment %s (unit %s)", apartment_id, apartment["unit_number"])
          return {"id": apartment_id, **apartment}

     def update_apartment(self, apartment_id: str, data: dict) -> dict:
          """
          Update apartment details.

          status and current_occupants are maintained by tenancy operations
          and cannot be written here.
          """
          apartment = self.get_apartment(apartment_id)

          derived = [field for field in DERIVED_FIELDS if field in data]
          if derived:
               raise ValidationError(f"Fields are derived from tenancies and cannot be set: {', '.join(derived)}")
          unknown = set(data) - set(EDITABLE_FIELDS)
          if unknown:
               raise ValidationError(f"Unknown apartment fields: {', '.join(sorted(unknown))}")

          changes = self._validate_fields(data)
          if "unit_number" in changes:
               self._ensure_unique_unit(changes["unit_number"], apartment_id)
          if "max_occupants" in changes:
               if changes["max_occupants"] < apartment["current_occupants"]:
                    raise ValidationError(
                         f"Maximum occupants cannot be lower than current occupants ({apartment['current_occupants']})"
                    )

          changes["updated_at"] = self.clock()
          self.store.update(APARTMENTS, apartment_id, changes)
          if "max_occupants" in changes:
               # status is re-derived in the store against the count at write time
               return self.store.adjust_occupancy(apartment_id, 0, changes["updated_at"])
          return {**apartment, **changes}

     def delete_apartment(self, apartment_id: str) -> dict:
          self.get_apartment(apartment_id)
          active = self.store.find(TENANT_APARTMENTS, apartment_id=apartment_id, status=TenancyStatus.ACTIVE.value)
          if active:
               raise ConflictError("Cannot delete apartment with active tenants")
          self.store.delete(APARTMENTS, apartment_id)
          logger.info("Deleted apartment %s", apartment_id)
          return {"success": True, "message": "Apartment deleted successfully"}

     def get_apartment(self, apartment_id: str) -> dict:
          apartment = self.store.get(APARTMENTS, apartment_id)
          if apartment is None:
               raise NotFoundError("Apartment not found")
          return apartment

     def get_all_apartments(self) -> list[dict]:
          return self.store.list_all(APARTMENTS)
