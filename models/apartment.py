# models/apartment.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, JSON, DateTime, CheckConstraint, func
from .base import Base, new_id


class ApartmentStatus(str, enum.Enum):
     """Occupancy view of an apartment, derived from its occupant count."""
     AVAILABLE = "available"
     OCCUPIED = "occupied"


def derive_status(current_occupants: int, max_occupants: int) -> str:
     """An apartment is occupied once it holds max_occupants tenants."""
     if current_occupants >= max_occupants:
          return ApartmentStatus.OCCUPIED.value
     return ApartmentStatus.AVAILABLE.value


class Apartment(Base):
     """
     Apartment model - a rentable unit inside a building.

     current_occupants counts active tenancies and never exceeds
     max_occupants outside of concurrent assignments.
     """
     __tablename__ = "apartments"
     __table_args__ = (
          CheckConstraint("current_occupants >= 0", name="ck_apartments_occupants_non_negative"),
     )

     id = Column(String(36), primary_key=True, default=new_id)
     building_name = Column(String(255), nullable=True)
     unit_number = Column(String(50), nullable=False, unique=True)
     floor = Column(Integer, nullable=True)
     rooms = Column(Integer, nullable=False)
     status = Column(String(20), default=ApartmentStatus.AVAILABLE.value, nullable=False, index=True)
     monthly_rent = Column(Numeric(12, 2), nullable=False)
     amenities = Column(JSON, nullable=True)  # list of unique strings

     # Occupancy
     max_occupants = Column(Integer, nullable=False)
     current_occupants = Column(Integer, default=0, nullable=False, index=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, nullable=True)

     def __repr__(self):
          return f"<Apartment(id={self.id}, unit_number='{self.unit_number}', occupants={self.current_occupants}/{self.max_occupants})>"
