# services/tenancy_coordinator.py
"""
Tenancy Coordinator - assigns and removes tenants across three collections.

Assignment touches tenant_apartments, apartments and users with three
independent writes. Preconditions are checked by reading first and writing
later without locks, so two concurrent assignments to the same apartment
can both pass the capacity check and push current_occupants past
max_occupants. Occupant counts themselves only move through
DocumentStore.adjust_occupancy, which keeps status in step with the count.

A failed write does not undo earlier ones unless the coordinator was built
with compensate=True; the partial state is logged either way.
"""
import logging
from typing import Callable, Optional

from errors import (
     CapacityExceededError,
     DuplicateActiveTenancyError,
     NotFoundError,
     UnderlyingStoreError,
     ValidationError,
)
from models import TenancyRole, TenancyStatus
from services.document_store import (
     APARTMENTS,
     LEASES,
     TENANT_APARTMENTS,
     USERS,
     DocumentStore,
     utcnow,
)
from services.validation import check_date_range, coerce_date

logger = logging.getLogger(__name__)


class TenancyCoordinator:
     """Multi-document tenancy workflows on top of a DocumentStore."""

     def __init__(self, store: DocumentStore, compensate: bool = False, clock: Callable = utcnow):
          self.store = store
          self.compensate = compensate
          self.clock = clock

     def _active_tenancies(self, **equals) -> list[dict]:
          return self.store.find(TENANT_APARTMENTS, status=TenancyStatus.ACTIVE.value, **equals)

     # ------------------------------------------------------------------
     # Assignment
     # ------------------------------------------------------------------

     def assign_tenant(self, user_id: str, apartment_id: str, lease_start, lease_end) -> dict:
          """
          Assign a user to an apartment.

          Preconditions, checked in order before any write:
          apartment exists, apartment below max_occupants, user exists,
          user has no active tenancy, lease_start <= lease_end.

          Returns:
               The created tenancy document including its id.

          Raises:
               NotFoundError, CapacityExceededError, DuplicateActiveTenancyError,
               InvalidDateRangeError, ValidationError, UnderlyingStoreError
          """
          apartment = self.store.get(APARTMENTS, apartment_id)
          if apartment is None:
               logger.warning("Assign rejected: apartment %s not found", apartment_id)
               raise NotFoundError("Apartment not found")

          if apartment["current_occupants"] >= apartment["max_occupants"]:
               logger.warning("Assign rejected: apartment %s is full", apartment_id)
               raise CapacityExceededError(
                    f"Apartment is at maximum capacity ({apartment['max_occupants']} occupants)"
               )

          user = self.store.get(USERS, user_id)
          if user is None:
               logger.warning("Assign rejected: user %s not found", user_id)
               raise NotFoundError("User not found")

          if self._active_tenancies(user_id=user_id):
               logger.warning("Assign rejected: user %s already has an active tenancy", user_id)
               raise DuplicateActiveTenancyError("User already has an active apartment")

          start = coerce_date(lease_start, "lease start date")
          end = coerce_date(lease_end, "lease end date")
          check_date_range(start, end)

          now = self.clock()
          tenancy = {
               "user_id": user_id,
               "apartment_id": apartment_id,
               "status": TenancyStatus.ACTIVE.value,
               "role": TenancyRole.PRIMARY.value,
               "lease_start_date": start,
               "lease_end_date": end,
               "monthly_rent": apartment["monthly_rent"],
               "created_at": now,
               "updated_at": now,
          }
          tenancy_id = self.store.create(TENANT_APARTMENTS, tenancy)

          try:
               self.store.adjust_occupancy(apartment_id, 1, now)
          except UnderlyingStoreError:
               logger.error(
                    "Partial assignment: tenancy %s created but occupant count of apartment %s not updated",
                    tenancy_id, apartment_id,
               )
               if self.compensate:
                    self._undo_tenancy(tenancy_id)
               raise

          try:
               self.store.update(USERS, user_id, {
                    "apartment_id": apartment_id,
                    "lease_start_date": start,
                    "lease_end_date": end,
                    "updated_at": now,
               })
          except UnderlyingStoreError:
               logger.error(
                    "Partial assignment: tenancy %s created and apartment %s counted but user %s not linked",
                    tenancy_id, apartment_id, user_id,
               )
               if self.compensate:
                    self._undo_occupant(apartment_id)
                    self._undo_tenancy(tenancy_id)
               raise

          logger.info("Assigned user %s to apartment %s (tenancy %s)", user_id, apartment_id, tenancy_id)
          return {"id": tenancy_id, **tenancy}

     def _undo_tenancy(self, tenancy_id: str) -> None:
          try:
               self.store.update(TENANT_APARTMENTS, tenancy_id, {
                    "status": TenancyStatus.INACTIVE.value,
                    "updated_at": self.clock(),
               })
               logger.error("Compensated: tenancy %s deactivated", tenancy_id)
          except UnderlyingStoreError:
               logger.exception("Compensation failed: tenancy %s is still active", tenancy_id)

     def _undo_occupant(self, apartment_id: str) -> None:
          try:
               self.store.adjust_occupancy(apartment_id, -1, self.clock())
               logger.error("Compensated: occupant count of apartment %s decremented", apartment_id)
          except UnderlyingStoreError:
               logger.exception("Compensation failed: apartment %s keeps the extra occupant", apartment_id)

     # ------------------------------------------------------------------
     # Removal
     # ------------------------------------------------------------------

     def remove_tenant(self, user_id: str, apartment_id: str) -> dict:
          """
          End the user's active tenancy in the apartment.

          The tenancy record is kept with status inactive. Returns it.
          """
          active = self._active_tenancies(user_id=user_id, apartment_id=apartment_id)
          if not active:
               logger.warning("Remove rejected: no active tenancy for user %s in apartment %s", user_id, apartment_id)
               raise NotFoundError("No active tenancy for this user and apartment")
          tenancy = active[0]

          now = self.clock()
          self.store.update(TENANT_APARTMENTS, tenancy["id"], {
               "status": TenancyStatus.INACTIVE.value,
               "updated_at": now,
          })

          try:
               self.store.adjust_occupancy(apartment_id, -1, now)
          except NotFoundError:
               logger.warning("Apartment %s vanished while removing user %s", apartment_id, user_id)

          user = self.store.get(USERS, user_id)
          if user is not None and user.get("apartment_id") == apartment_id:
               self.store.update(USERS, user_id, {
                    "apartment_id": None,
                    "lease_start_date": None,
                    "lease_end_date": None,
                    "updated_at": now,
               })

          logger.info("Removed user %s from apartment %s (tenancy %s)", user_id, apartment_id, tenancy["id"])
          return {**tenancy, "status": TenancyStatus.INACTIVE.value, "updated_at": now}

     # ------------------------------------------------------------------
     # Queries
     # ------------------------------------------------------------------

     def get_apartment_tenants(self, apartment_id: str) -> list[dict]:
          """Active tenancies of the apartment, each with its `user` document (or None)."""
          tenants = []
          for tenancy in self._active_tenancies(apartment_id=apartment_id):
               user = self.store.get(USERS, tenancy["user_id"])
               tenants.append({**tenancy, "user": user})
          return tenants

     def get_apartment_history(self, apartment_id: str) -> list[dict]:
          """
          Every tenancy ever recorded for the apartment, oldest first, each with
          its `user` document (or None). Works for deleted apartments too.
          """
          tenancies = self.store.find(TENANT_APARTMENTS, apartment_id=apartment_id)
          tenancies.sort(key=lambda t: (t["created_at"], t["lease_start_date"]))
          return [{**tenancy, "user": self.store.get(USERS, tenancy["user_id"])} for tenancy in tenancies]

     def get_available_apartments(self, threshold: Optional[int] = None) -> list[dict]:
          """
          Apartments that can take another tenant.

          With a threshold, apartments with fewer occupants than that fixed
          number are returned regardless of their own capacity.
          """
          if threshold is not None:
               return self.store.query_range(APARTMENTS, "current_occupants", "<", threshold)
          return [
               apartment for apartment in self.store.list_all(APARTMENTS)
               if apartment["current_occupants"] < apartment["max_occupants"]
          ]

     def get_tenant_apartment(self, user_id: str) -> dict:
          """The user's current apartment with `tenancy` and `lease` attached."""
          active = self._active_tenancies(user_id=user_id)
          if not active:
               raise NotFoundError("User has no active apartment")
          tenancy = active[0]

          apartment = self.store.get(APARTMENTS, tenancy["apartment_id"])
          if apartment is None:
               raise NotFoundError("Apartment not found")

          lease = None
          if tenancy.get("lease_id"):
               lease = self.store.get(LEASES, tenancy["lease_id"])
          return {**apartment, "tenancy": tenancy, "lease": lease}

     def update_tenant_role(self, user_id: str, apartment_id: str, new_role: str) -> dict:
          allowed = [role.value for role in TenancyRole]
          if new_role not in allowed:
               raise ValidationError(f"Invalid role '{new_role}': must be one of {', '.join(allowed)}")

          active = self._active_tenancies(user_id=user_id, apartment_id=apartment_id)
          if not active:
               raise NotFoundError("No active tenancy for this user and apartment")
          tenancy = active[0]
          if tenancy["role"] == new_role:
               return tenancy

          changes = {"role": new_role, "updated_at": self.clock()}
          self.store.update(TENANT_APARTMENTS, tenancy["id"], changes)
          logger.info("Changed role of user %s in apartment %s to %s", user_id, apartment_id, new_role)
          return {**tenancy, **changes}
