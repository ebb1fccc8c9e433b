# schemas/apartment.py
"""
Pydantic schemas for Apartment API request/response validation.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum


class ApartmentStatusEnum(str, Enum):
     """Occupancy status, derived from current_occupants."""
     AVAILABLE = "available"
     OCCUPIED = "occupied"


class ApartmentCreate(BaseModel):
     """Schema for creating a new apartment."""
     building_name: Optional[str] = Field(None, max_length=255)
     unit_number: str = Field(..., min_length=1, max_length=50, description="Unique unit number")
     floor: Optional[int] = Field(None, gt=0)
     rooms: int = Field(..., gt=0)
     monthly_rent: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     amenities: List[str] = Field(default_factory=list)
     max_occupants: int = Field(..., gt=0, description="Occupancy cap for this apartment")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "building_name": "Sunset Towers",
                    "unit_number": "12B",
                    "floor": 12,
                    "rooms": 2,
                    "monthly_rent": 1500.00,
                    "amenities": ["balcony", "parking"],
                    "max_occupants": 3
               }
          }
     )


class ApartmentUpdate(BaseModel):
     """Schema for updating an apartment. Occupancy and status are not writable."""
     building_name: Optional[str] = Field(None, max_length=255)
     unit_number: Optional[str] = Field(None, min_length=1, max_length=50)
     floor: Optional[int] = Field(None, gt=0)
     rooms: Optional[int] = Field(None, gt=0)
     monthly_rent: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     amenities: Optional[List[str]] = None
     max_occupants: Optional[int] = Field(None, gt=0)

     model_config = ConfigDict(extra="forbid")


class ApartmentResponse(BaseModel):
     """Schema for apartment response."""
     id: str
     building_name: Optional[str] = None
     unit_number: str
     floor: Optional[int] = None
     rooms: int
     status: ApartmentStatusEnum
     monthly_rent: Decimal
     amenities: List[str] = Field(default_factory=list)
     max_occupants: int
     current_occupants: int
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)
