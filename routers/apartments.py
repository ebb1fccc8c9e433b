# routers/apartments.py
"""
Apartment API routes.

- Managers (admin / manager / landlord / owner): create, update, delete
- Any authenticated user: list and view apartments
"""
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, Query, status

import config
from dependencies import (
     get_apartment_service,
     get_coordinator,
     http_error,
     require_manager,
     verify_token,
)
from errors import TenancyError
from schemas.apartment import ApartmentCreate, ApartmentUpdate, ApartmentResponse
from schemas.tenancy import ApartmentTenantResponse
from services.apartment_service import ApartmentService
from services.tenancy_coordinator import TenancyCoordinator

router = APIRouter(prefix="/api/apartments", tags=["apartments"])


@router.post(
     "",
     response_model=ApartmentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new apartment"
)
def create_apartment(
     body: ApartmentCreate,
     service: ApartmentService = Depends(get_apartment_service),
     token: dict = Depends(require_manager),
):
     """
     Create an apartment with no occupants.

     - **unit_number**: must be unique across apartments
     - **max_occupants**: occupancy cap used by tenant assignment
     """
     try:
          return service.create_apartment(body.model_dump())
     except TenancyError as exc:
          raise http_error(exc)


@router.get("", response_model=List[ApartmentResponse], summary="List all apartments")
def list_apartments(
     service: ApartmentService = Depends(get_apartment_service),
     token: dict = Depends(verify_token),
):
     try:
          return service.get_all_apartments()
     except TenancyError as exc:
          raise http_error(exc)


@router.get("/available", response_model=List[ApartmentResponse], summary="List apartments with free capacity")
def list_available_apartments(
     threshold: Optional[int] = Query(
          None, ge=1, description="Fixed occupant threshold instead of each apartment's max_occupants"
     ),
     coordinator: TenancyCoordinator = Depends(get_coordinator),
     token: dict = Depends(verify_token),
):
     if threshold is None:
          threshold = config.LEGACY_AVAILABILITY_THRESHOLD
     try:
          return coordinator.get_available_apartments(threshold)
     except TenancyError as exc:
          raise http_error(exc)


@router.get("/{apartment_id}", response_model=ApartmentResponse, summary="Get apartment by ID")
def get_apartment(
     apartment_id: str,
     service: ApartmentService = Depends(get_apartment_service),
     token: dict = Depends(verify_token),
):
     try:
          return service.get_apartment(apartment_id)
     except TenancyError as exc:
          raise http_error(exc)


@router.patch("/{apartment_id}", response_model=ApartmentResponse, summary="Update apartment details")
def update_apartment(
     apartment_id: str,
     body: ApartmentUpdate,
     service: ApartmentService = Depends(get_apartment_service),
     token: dict = Depends(require_manager),
):
     changes = body.model_dump(exclude_unset=True)
     if not changes:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
     try:
          return service.update_apartment(apartment_id, changes)
     except TenancyError as exc:
          raise http_error(exc)


@router.delete("/{apartment_id}", summary="Delete an apartment without active tenants")
def delete_apartment(
     apartment_id: str,
     service: ApartmentService = Depends(get_apartment_service),
     token: dict = Depends(require_manager),
):
     try:
          return service.delete_apartment(apartment_id)
     except TenancyError as exc:
          raise http_error(exc)


@router.get(
     "/{apartment_id}/tenants",
     response_model=List[ApartmentTenantResponse],
     summary="List active tenants of an apartment"
)
def list_apartment_tenants(
     apartment_id: str,
     coordinator: TenancyCoordinator = Depends(get_coordinator),
     token: dict = Depends(require_manager),
):
     try:
          return coordinator.get_apartment_tenants(apartment_id)
     except TenancyError as exc:
          raise http_error(exc)


@router.get(
     "/{apartment_id}/history",
     response_model=List[ApartmentTenantResponse],
     summary="List every tenancy an apartment has had"
)
def list_apartment_history(
     apartment_id: str,
     coordinator: TenancyCoordinator = Depends(get_coordinator),
     token: dict = Depends(require_manager),
):
     """Rental history, oldest first, including ended tenancies."""
     try:
          return coordinator.get_apartment_history(apartment_id)
     except TenancyError as exc:
          raise http_error(exc)
