# services/validation.py
"""Field checks shared by the apartment, tenancy and lease services."""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from errors import InvalidDateRangeError, ValidationError


def coerce_date(value: Any, field: str) -> date:
     """Accept a date, a datetime or an ISO-8601 string."""
     if isinstance(value, datetime):
          return value.date()
     if isinstance(value, date):
          return value
     if isinstance(value, str):
          try:
               return date.fromisoformat(value[:10])
          except ValueError:
               pass
     raise ValidationError(f"Invalid {field}: expected an ISO date, got {value!r}")


def check_date_range(start: date, end: date) -> None:
     if start > end:
          raise InvalidDateRangeError(
               f"Invalid lease dates: start {start.isoformat()} is after end {end.isoformat()}"
          )


def is_number(value: Any) -> bool:
     return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def require_positive_int(value: Any, field: str) -> int:
     if not is_number(value) or value <= 0 or int(value) != value:
          raise ValidationError(f"Invalid {field}: must be a positive whole number")
     return int(value)


def require_positive_amount(value: Any, field: str) -> Decimal:
     if not is_number(value) or value <= 0:
          raise ValidationError(f"Invalid {field}: must be a positive number")
     try:
          return Decimal(str(value))
     except InvalidOperation:
          raise ValidationError(f"Invalid {field}: must be a positive number")
