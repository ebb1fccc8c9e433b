# services/__init__.py
from .document_store import (
     DocumentStore,
     SqlDocumentStore,
     APARTMENTS,
     TENANT_APARTMENTS,
     USERS,
     LEASES,
)
from .apartment_service import ApartmentService
from .tenancy_coordinator import TenancyCoordinator
from .lease_service import LeaseService

__all__ = [
     "DocumentStore",
     "SqlDocumentStore",
     "APARTMENTS",
     "TENANT_APARTMENTS",
     "USERS",
     "LEASES",
     "ApartmentService",
     "TenancyCoordinator",
     "LeaseService",
]
