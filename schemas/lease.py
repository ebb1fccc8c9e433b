# schemas/lease.py
"""
Pydantic schemas for lease endpoints.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Any
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum


class LeaseStatusEnum(str, Enum):
     ACTIVE = "active"
     ENDED = "ended"


class LeaseCreate(BaseModel):
     """Schema for creating a lease on a tenancy."""
     tenant_apartment_id: str = Field(..., min_length=1)
     start_date: date
     end_date: date
     monthly_rent: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2,
                                             description="Defaults to the tenancy rent snapshot")
     deposit_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     terms: Optional[str] = None


class LeaseUpdate(BaseModel):
     start_date: Optional[date] = None
     end_date: Optional[date] = None
     monthly_rent: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     deposit_amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     terms: Optional[str] = None

     model_config = ConfigDict(extra="forbid")


class LeaseResponse(BaseModel):
     id: str
     tenant_apartment_id: str
     user_id: str
     apartment_id: str
     start_date: date
     end_date: date
     monthly_rent: Decimal
     deposit_amount: Optional[Decimal] = None
     terms: Optional[str] = None
     status: LeaseStatusEnum
     ended_at: Optional[datetime] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None


class LeaseDetailsResponse(LeaseResponse):
     """Lease with the tenancy, apartment and user it refers to."""
     tenancy: Optional[dict[str, Any]] = None
     apartment: Optional[dict[str, Any]] = None
     user: Optional[dict[str, Any]] = None
