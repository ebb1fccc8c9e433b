# routers/tenancies.py
"""
Tenant assignment API routes.

Assignment, removal and role changes are limited to managers. Tenants can
only look up their own current apartment.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from dependencies import get_coordinator, http_error, is_manager, require_manager, verify_token
from errors import TenancyError
from schemas.tenancy import (
     AssignTenantRequest,
     RoleUpdateRequest,
     TenancyResponse,
     TenantApartmentResponse,
)
from services.tenancy_coordinator import TenancyCoordinator

router = APIRouter(prefix="/api/tenancies", tags=["tenancies"])


@router.post(
     "",
     response_model=TenancyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Assign a tenant to an apartment"
)
def assign_tenant(
     body: AssignTenantRequest,
     coordinator: TenancyCoordinator = Depends(get_coordinator),
     token: dict = Depends(require_manager),
):
     """
     Create an active tenancy, count the occupant and link the user.

     Fails with 404 (apartment / user missing), 409 (apartment full or user
     already housed) or 422 (end date before start date).
     """
     try:
          return coordinator.assign_tenant(
               body.user_id,
               body.apartment_id,
               body.lease_start_date,
               body.lease_end_date,
          )
     except TenancyError as exc:
          raise http_error(exc)


@router.delete("/{apartment_id}/{user_id}", summary="Remove a tenant from an apartment")
def remove_tenant(
     apartment_id: str,
     user_id: str,
     coordinator: TenancyCoordinator = Depends(get_coordinator),
     token: dict = Depends(require_manager),
):
     try:
          tenancy = coordinator.remove_tenant(user_id, apartment_id)
     except TenancyError as exc:
          raise http_error(exc)
     return {"success": True, "tenancy_id": tenancy["id"], "status": tenancy["status"]}


@router.put(
     "/{apartment_id}/{user_id}/role",
     response_model=TenancyResponse,
     summary="Change a tenant's role in an apartment"
)
def update_tenant_role(
     apartment_id: str,
     user_id: str,
     body: RoleUpdateRequest,
     coordinator: TenancyCoordinator = Depends(get_coordinator),
     token: dict = Depends(require_manager),
):
     try:
          return coordinator.update_tenant_role(user_id, apartment_id, body.role.value)
     except TenancyError as exc:
          raise http_error(exc)


@router.get(
     "/users/{user_id}/apartment",
     response_model=TenantApartmentResponse,
     summary="Get a user's current apartment"
)
def get_tenant_apartment(
     user_id: str,
     coordinator: TenancyCoordinator = Depends(get_coordinator),
     token: dict = Depends(verify_token),
):
     # Tenants can only view their own apartment
     if not is_manager(token) and str(token.get("id")) != user_id:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
     try:
          return coordinator.get_tenant_apartment(user_id)
     except TenancyError as exc:
          raise http_error(exc)
