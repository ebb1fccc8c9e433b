# errors.py
"""
Error hierarchy for tenancy operations.

Every error carries the HTTP status code the API layer answers with, so
routers can turn any of them into an HTTPException without a lookup table.
"""


class TenancyError(Exception):
     """Base class for all tenancy, apartment and lease errors."""
     status_code = 400

     def __init__(self, message: str):
          super().__init__(message)
          self.message = message


class NotFoundError(TenancyError):
     """Apartment, user, tenancy or lease is absent."""
     status_code = 404


class CapacityExceededError(TenancyError):
     """Apartment already holds max_occupants active tenants."""
     status_code = 409


class DuplicateActiveTenancyError(TenancyError):
     """User already has an active tenancy."""
     status_code = 409


class InvalidDateRangeError(TenancyError):
     """Lease start date is after the lease end date."""
     status_code = 422


class ValidationError(TenancyError):
     """Malformed or missing required field."""
     status_code = 422


class ConflictError(TenancyError):
     """Write rejected because of the current state of another record."""
     status_code = 409


class UnderlyingStoreError(TenancyError):
     """Network or store failure, wrapping the original exception."""
     status_code = 503
