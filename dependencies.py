# dependencies.py
"""
Shared FastAPI dependencies: token verification, role checks and the
service objects built on the document store.
"""
from fastapi import Depends, HTTPException, Request, status
from jose import JWTError, jwt

import config
from database import get_document_store
from errors import TenancyError
from services.apartment_service import ApartmentService
from services.document_store import DocumentStore
from services.lease_service import LeaseService
from services.tenancy_coordinator import TenancyCoordinator

# Roles allowed to create apartments and assign tenants
MANAGING_ROLES = ("admin", "manager", "landlord", "owner")


def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=401, detail="Missing token")
     token = auth.split(" ")[1]
     try:
          return jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
     except JWTError:
          raise HTTPException(status_code=403, detail="Invalid token")


def require_manager(token: dict = Depends(verify_token)) -> dict:
     if token.get("role") not in MANAGING_ROLES:
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="Only landlords and administrators can perform this action",
          )
     return token


def is_manager(token: dict) -> bool:
     return token.get("role") in MANAGING_ROLES


def get_coordinator(store: DocumentStore = Depends(get_document_store)) -> TenancyCoordinator:
     return TenancyCoordinator(store, compensate=config.TENANCY_COMPENSATE_WRITES)


def get_apartment_service(store: DocumentStore = Depends(get_document_store)) -> ApartmentService:
     return ApartmentService(store)


def get_lease_service(
     store: DocumentStore = Depends(get_document_store),
     coordinator: TenancyCoordinator = Depends(get_coordinator),
) -> LeaseService:
     return LeaseService(store, coordinator)


def http_error(exc: TenancyError) -> HTTPException:
     """Map a service error onto the HTTP status it carries."""
     return HTTPException(status_code=exc.status_code, detail=exc.message)
