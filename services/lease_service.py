# services/lease_service.py
"""
Lease Service - lease agreements attached to tenancies.

A lease belongs to one tenancy. Creating or changing a lease copies its
dates onto the tenancy and, while the user still points at the apartment,
onto the user. Ending the last active lease of a tenancy ends the tenancy
through the coordinator.
"""
import logging
from datetime import date
from typing import Callable, Optional

from errors import ConflictError, NotFoundError, ValidationError
from models import LeaseStatus, TenancyStatus
from services.document_store import (
     APARTMENTS,
     LEASES,
     TENANT_APARTMENTS,
     USERS,
     DocumentStore,
     utcnow,
)
from services.tenancy_coordinator import TenancyCoordinator
from services.validation import (
     check_date_range,
     coerce_date,
     require_positive_amount,
)

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("start_date", "end_date", "monthly_rent", "deposit_amount", "terms")
LEASABLE_TENANCY_STATUSES = (TenancyStatus.ACTIVE.value, TenancyStatus.PENDING.value)


def _overlaps(start: date, end: date, other: dict) -> bool:
     return start <= other["end_date"] and other["start_date"] <= end


class LeaseService:
     """Service class for lease lifecycle operations."""

     def __init__(self, store: DocumentStore, coordinator: Optional[TenancyCoordinator] = None,
                  clock: Callable = utcnow):
          self.store = store
          self.coordinator = coordinator or TenancyCoordinator(store, clock=clock)
          self.clock = clock

     def _get_lease(self, lease_id: str) -> dict:
          lease = self.store.get(LEASES, lease_id)
          if lease is None:
               raise NotFoundError("Lease not found")
          return lease

     def _check_conflicts(self, tenancy_id: str, start: date, end: date, lease_id: Optional[str] = None) -> None:
          for other in self.store.find(LEASES, tenant_apartment_id=tenancy_id, status=LeaseStatus.ACTIVE.value):
               if other["id"] != lease_id and _overlaps(start, end, other):
                    raise ConflictError(
                         f"Lease dates overlap lease {other['id']} "
                         f"({other['start_date'].isoformat()} to {other['end_date'].isoformat()})"
                    )

     def _mirror_dates(self, tenancy: dict, start: date, end: date, lease_id: str, now) -> None:
          self.store.update(TENANT_APARTMENTS, tenancy["id"], {
               "lease_id": lease_id,
               "lease_start_date": start,
               "lease_end_date": end,
               "updated_at": now,
          })
          user = self.store.get(USERS, tenancy["user_id"])
          if user is not None and user.get("apartment_id") == tenancy["apartment_id"]:
               self.store.update(USERS, tenancy["user_id"], {
                    "lease_start_date": start,
                    "lease_end_date": end,
                    "updated_at": now,
               })

     def create_lease(
          self,
          tenant_apartment_id: str,
          start_date,
          end_date,
          monthly_rent=None,
          deposit_amount=None,
          terms: Optional[str] = None,
     ) -> dict:
          """
          Create a lease for a tenancy.

          Args:
               tenant_apartment_id: Tenancy the lease belongs to (active or pending)
               start_date: First day of the lease
               end_date: Last day of the lease
               monthly_rent: Defaults to the rent snapshot on the tenancy
               deposit_amount: Optional deposit
               terms: Optional free-text terms

          Returns:
               Created lease document

          Raises:
               NotFoundError: tenancy doesn't exist
               ConflictError: tenancy ended, or dates overlap another active lease
               InvalidDateRangeError / ValidationError: bad dates or amounts
          """
          tenancy = self.store.get(TENANT_APARTMENTS, tenant_apartment_id)
          if tenancy is None:
               raise NotFoundError("Tenancy not found")
          if tenancy["status"] not in LEASABLE_TENANCY_STATUSES:
               raise ConflictError("Cannot create a lease for an inactive tenancy")

          start = coerce_date(start_date, "lease start date")
          end = coerce_date(end_date, "lease end date")
          check_date_range(start, end)

          rent = monthly_rent if monthly_rent is not None else tenancy.get("monthly_rent")
          if rent is None:
               raise ValidationError("Missing required field: monthly_rent")
          rent = require_positive_amount(rent, "monthly rent")
          deposit = None
          if deposit_amount is not None:
               deposit = require_positive_amount(deposit_amount, "deposit amount")

          self._check_conflicts(tenant_apartment_id, start, end)

          now = self.clock()
          lease = {
               "tenant_apartment_id": tenant_apartment_id,
               "user_id": tenancy["user_id"],
               "apartment_id": tenancy["apartment_id"],
               "start_date": start,
               "end_date": end,
               "monthly_rent": rent,
               "deposit_amount": deposit,
               "terms": terms,
               "status": LeaseStatus.ACTIVE.value,
               "ended_at": None,
               "created_at": now,
               "updated_at": now,
          }
          lease_id = self.store.create(LEASES, lease)
          self._mirror_dates(tenancy, start, end, lease_id, now)

          logger.info("Created lease %s for tenancy %s", lease_id, tenant_apartment_id)
          return {"id": lease_id, **lease}

     def update_lease(self, lease_id: str, changes: dict) -> dict:
          lease = self._get_lease(lease_id)
          if lease["status"] == LeaseStatus.ENDED.value:
               raise ConflictError("Ended leases cannot be changed")

          unknown = set(changes) - set(UPDATABLE_FIELDS)
          if unknown:
               raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

          updates = dict(changes)
          if updates.get("monthly_rent") is not None:
               updates["monthly_rent"] = require_positive_amount(updates["monthly_rent"], "monthly rent")
          elif "monthly_rent" in updates:
               raise ValidationError("Monthly rent cannot be cleared")
          if updates.get("deposit_amount") is not None:
               updates["deposit_amount"] = require_positive_amount(updates["deposit_amount"], "deposit amount")

          dates_changed = "start_date" in updates or "end_date" in updates
          if dates_changed:
               start = coerce_date(updates.get("start_date", lease["start_date"]), "lease start date")
               end = coerce_date(updates.get("end_date", lease["end_date"]), "lease end date")
               check_date_range(start, end)
               self._check_conflicts(lease["tenant_apartment_id"], start, end, lease_id)
               updates["start_date"] = start
               updates["end_date"] = end

          now = self.clock()
          updates["updated_at"] = now
          self.store.update(LEASES, lease_id, updates)

          if dates_changed:
               tenancy = self.store.get(TENANT_APARTMENTS, lease["tenant_apartment_id"])
               if tenancy is not None and tenancy.get("lease_id") == lease_id:
                    self._mirror_dates(tenancy, updates["start_date"], updates["end_date"], lease_id, now)
          return {**lease, **updates}

     def end_lease(self, lease_id: str) -> dict:
          """
          End a lease.

          While another active lease still covers the tenancy, the tenancy
          stays active and points at that lease. Otherwise an active tenant
          is removed through the coordinator and a pending tenancy is closed.
          """
          lease = self._get_lease(lease_id)
          if lease["status"] == LeaseStatus.ENDED.value:
               raise ConflictError("Lease has already ended")

          now = self.clock()
          changes = {"status": LeaseStatus.ENDED.value, "ended_at": now, "updated_at": now}
          self.store.update(LEASES, lease_id, changes)

          tenancy = self.store.get(TENANT_APARTMENTS, lease["tenant_apartment_id"])
          remaining = [
               other for other in self.store.find(
                    LEASES, tenant_apartment_id=lease["tenant_apartment_id"], status=LeaseStatus.ACTIVE.value
               )
               if other["id"] != lease_id
          ]
          if tenancy is None:
               logger.warning("Lease %s ended without a tenancy record", lease_id)
          elif remaining:
               if tenancy.get("lease_id") == lease_id:
                    current = max(remaining, key=lambda other: other["start_date"])
                    self._mirror_dates(tenancy, current["start_date"], current["end_date"], current["id"], now)
          elif tenancy["status"] == TenancyStatus.ACTIVE.value:
               self.coordinator.remove_tenant(tenancy["user_id"], tenancy["apartment_id"])
          elif tenancy["status"] == TenancyStatus.PENDING.value:
               self.store.update(TENANT_APARTMENTS, tenancy["id"], {
                    "status": TenancyStatus.INACTIVE.value,
                    "updated_at": now,
               })

          logger.info("Ended lease %s", lease_id)
          return {**lease, **changes}

     def get_current_lease(self, tenant_apartment_id: str) -> dict:
          """
          Details of the lease a tenancy currently points at.

          Raises:
               NotFoundError: tenancy doesn't exist or has no lease
          """
          tenancy = self.store.get(TENANT_APARTMENTS, tenant_apartment_id)
          if tenancy is None:
               raise NotFoundError("Tenancy not found")
          if not tenancy.get("lease_id"):
               raise NotFoundError("Tenancy has no lease")
          return self.get_lease_details(tenancy["lease_id"])

     def get_lease_details(self, lease_id: str) -> dict:
          lease = self._get_lease(lease_id)
          return {
               **lease,
               "tenancy": self.store.get(TENANT_APARTMENTS, lease["tenant_apartment_id"]),
               "apartment": self.store.get(APARTMENTS, lease["apartment_id"]),
               "user": self.store.get(USERS, lease["user_id"]),
          }
