# routers/leases.py
"""
Lease API routes for managers.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from dependencies import get_lease_service, http_error, require_manager
from errors import TenancyError
from schemas.lease import LeaseCreate, LeaseUpdate, LeaseResponse, LeaseDetailsResponse
from services.lease_service import LeaseService

router = APIRouter(prefix="/api/leases", tags=["leases"])


@router.post("", response_model=LeaseResponse, status_code=status.HTTP_201_CREATED, summary="Create a lease")
def create_lease(
     body: LeaseCreate,
     service: LeaseService = Depends(get_lease_service),
     token: dict = Depends(require_manager),
):
     try:
          return service.create_lease(
               body.tenant_apartment_id,
               body.start_date,
               body.end_date,
               monthly_rent=body.monthly_rent,
               deposit_amount=body.deposit_amount,
               terms=body.terms,
          )
     except TenancyError as exc:
          raise http_error(exc)


@router.get(
     "/tenancy/{tenant_apartment_id}",
     response_model=LeaseDetailsResponse,
     summary="Get the current lease of a tenancy"
)
def get_current_lease(
     tenant_apartment_id: str,
     service: LeaseService = Depends(get_lease_service),
     token: dict = Depends(require_manager),
):
     try:
          return service.get_current_lease(tenant_apartment_id)
     except TenancyError as exc:
          raise http_error(exc)


@router.get("/{lease_id}", response_model=LeaseDetailsResponse, summary="Get lease with tenancy, apartment and user")
def get_lease_details(
     lease_id: str,
     service: LeaseService = Depends(get_lease_service),
     token: dict = Depends(require_manager),
):
     try:
          return service.get_lease_details(lease_id)
     except TenancyError as exc:
          raise http_error(exc)


@router.patch("/{lease_id}", response_model=LeaseResponse, summary="Update lease details")
def update_lease(
     lease_id: str,
     body: LeaseUpdate,
     service: LeaseService = Depends(get_lease_service),
     token: dict = Depends(require_manager),
):
     changes = body.model_dump(exclude_unset=True)
     if not changes:
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")
     try:
          return service.update_lease(lease_id, changes)
     except TenancyError as exc:
          raise http_error(exc)


@router.post("/{lease_id}/end", response_model=LeaseResponse, summary="End a lease")
def end_lease(
     lease_id: str,
     service: LeaseService = Depends(get_lease_service),
     token: dict = Depends(require_manager),
):
     """
     Mark the lease ended. If no other active lease covers its tenancy, an
     active tenancy is ended too, freeing the occupant slot.
     """
     try:
          return service.end_lease(lease_id)
     except TenancyError as exc:
          raise http_error(exc)
