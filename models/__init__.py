# models/__init__.py
from .base import Base, new_id
from .user import User
from .apartment import Apartment, ApartmentStatus, derive_status
from .tenant_apartment import TenantApartment, TenancyStatus, TenancyRole
from .lease import Lease, LeaseStatus

__all__ = [
     "Base",
     "new_id",
     "User",
     "Apartment",
     "ApartmentStatus",
     "derive_status",
     "TenantApartment",
     "TenancyStatus",
     "TenancyRole",
     "Lease",
     "LeaseStatus",
]
