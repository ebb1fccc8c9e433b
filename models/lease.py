# models/lease.py
import enum
from sqlalchemy import Column, String, Numeric, Date, Text, DateTime, func
from .base import Base, new_id


class LeaseStatus(str, enum.Enum):
     ACTIVE = "active"
     ENDED = "ended"


class Lease(Base):
     """
     Lease model - rental agreement attached to a tenancy.
     """
     __tablename__ = "leases"

     id = Column(String(36), primary_key=True, default=new_id)
     tenant_apartment_id = Column(String(36), nullable=False, index=True)
     user_id = Column(String(36), nullable=False, index=True)
     apartment_id = Column(String(36), nullable=False, index=True)

     # Lease period
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=False)

     # Pricing
     monthly_rent = Column(Numeric(12, 2), nullable=False)
     deposit_amount = Column(Numeric(12, 2), nullable=True)

     terms = Column(Text, nullable=True)
     status = Column(String(20), default=LeaseStatus.ACTIVE.value, nullable=False, index=True)
     ended_at = Column(DateTime, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, nullable=True)

     def __repr__(self):
          return f"<Lease(id={self.id}, tenant_apartment_id={self.tenant_apartment_id}, status='{self.status}')>"
