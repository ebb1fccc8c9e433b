# models/user.py
from sqlalchemy import Column, String, Date, DateTime, func
from .base import Base, new_id


class User(Base):
     """
     User model - created by the external identity flow.
     Tenancy operations only touch the apartment back-reference and the
     lease dates mirrored from the active tenancy.
     """
     __tablename__ = "users"

     id = Column(String(36), primary_key=True, default=new_id)
     email = Column(String(255), unique=True, nullable=True)
     first_name = Column(String(100), nullable=True)
     last_name = Column(String(100), nullable=True)
     role = Column(String(50), default="tenant", nullable=False)  # admin, manager, landlord, owner, tenant

     # Weak reference to the current apartment
     apartment_id = Column(String(36), nullable=True, index=True)
     lease_start_date = Column(Date, nullable=True)
     lease_end_date = Column(Date, nullable=True)

     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, nullable=True)

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
