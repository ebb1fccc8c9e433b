# schemas/__init__.py
from .apartment import (
     ApartmentCreate,
     ApartmentUpdate,
     ApartmentResponse,
)
from .lease import (
     LeaseCreate,
     LeaseUpdate,
     LeaseResponse,
     LeaseDetailsResponse,
)
from .tenancy import (
     AssignTenantRequest,
     RoleUpdateRequest,
     TenancyResponse,
     ApartmentTenantResponse,
     TenantApartmentResponse,
)

__all__ = [
     "ApartmentCreate",
     "ApartmentUpdate",
     "ApartmentResponse",
     "LeaseCreate",
     "LeaseUpdate",
     "LeaseResponse",
     "LeaseDetailsResponse",
     "AssignTenantRequest",
     "RoleUpdateRequest",
     "TenancyResponse",
     "ApartmentTenantResponse",
     "TenantApartmentResponse",
]
