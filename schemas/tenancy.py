# schemas/tenancy.py
"""
Pydantic schemas for tenant assignment endpoints.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum

from .apartment import ApartmentResponse
from .lease import LeaseResponse


class TenancyStatusEnum(str, Enum):
     ACTIVE = "active"
     INACTIVE = "inactive"
     PENDING = "pending"


class TenancyRoleEnum(str, Enum):
     PRIMARY = "primary"
     SECONDARY = "secondary"


class AssignTenantRequest(BaseModel):
     """Request body for assigning a tenant to an apartment."""
     user_id: str = Field(..., min_length=1)
     apartment_id: str = Field(..., min_length=1)
     lease_start_date: date
     lease_end_date: date

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "user_id": "3f2a9c1e0b7d4e6f8a1b2c3d4e5f6a7b",
                    "apartment_id": "9b8a7c6d5e4f3a2b1c0d9e8f7a6b5c4d",
                    "lease_start_date": "2024-01-01",
                    "lease_end_date": "2024-12-31"
               }
          }
     )


class RoleUpdateRequest(BaseModel):
     role: TenancyRoleEnum


class UserSummary(BaseModel):
     id: str
     email: Optional[str] = None
     first_name: Optional[str] = None
     last_name: Optional[str] = None
     role: Optional[str] = None
     apartment_id: Optional[str] = None
     lease_start_date: Optional[date] = None
     lease_end_date: Optional[date] = None


class TenancyResponse(BaseModel):
     """Schema for a tenant-apartment record."""
     id: str
     user_id: str
     apartment_id: str
     status: TenancyStatusEnum
     role: TenancyRoleEnum
     lease_start_date: date
     lease_end_date: date
     monthly_rent: Optional[Decimal] = None
     lease_id: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None


class ApartmentTenantResponse(TenancyResponse):
     """Tenancy enriched with the referenced user."""
     user: Optional[UserSummary] = None


class TenantApartmentResponse(ApartmentResponse):
     """A user's current apartment with its tenancy and lease."""
     tenancy: TenancyResponse
     lease: Optional[LeaseResponse] = None
