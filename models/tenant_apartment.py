# models/tenant_apartment.py
import enum
from sqlalchemy import Column, String, Numeric, Date, DateTime, func
from .base import Base, new_id


class TenancyStatus(str, enum.Enum):
     ACTIVE = "active"
     INACTIVE = "inactive"
     PENDING = "pending"


class TenancyRole(str, enum.Enum):
     PRIMARY = "primary"
     SECONDARY = "secondary"


class TenantApartment(Base):
     """
     TenantApartment model - links a user to an apartment for a lease period.

     Records are never deleted; ending a tenancy flips status to inactive
     so the table doubles as the rental history of every apartment.
     """
     __tablename__ = "tenant_apartments"

     id = Column(String(36), primary_key=True, default=new_id)
     # Key references without foreign keys; history outlives deleted apartments
     user_id = Column(String(36), nullable=False, index=True)
     apartment_id = Column(String(36), nullable=False, index=True)

     status = Column(String(20), default=TenancyStatus.ACTIVE.value, nullable=False, index=True)
     role = Column(String(20), default=TenancyRole.PRIMARY.value, nullable=False)

     # Lease period
     lease_start_date = Column(Date, nullable=False)
     lease_end_date = Column(Date, nullable=False)
     lease_id = Column(String(36), nullable=True)

     # Rent snapshot at assignment time
     monthly_rent = Column(Numeric(12, 2), nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, nullable=True)

     def __repr__(self):
          return f"<TenantApartment(id={self.id}, user_id={self.user_id}, apartment_id={self.apartment_id}, status='{self.status}')>"
