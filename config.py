# config.py
"""
Environment configuration.

Values are read once at import time after loading `.env`.
"""
import os
from typing import Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
     return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str) -> Optional[int]:
     value = os.getenv(name)
     if value is None or value.strip() == "":
          return None
     return int(value)


def build_database_url() -> str:
     """
     DATABASE_URL wins when set; otherwise build the Azure SQL URL
     from the DB_* variables.
     """
     url = os.getenv("DATABASE_URL")
     if url:
          return url
     user = quote_plus(os.getenv("DB_USER") or "")
     password = quote_plus(os.getenv("DB_PASS") or "")
     server = os.getenv("DB_SERVER")
     port = os.getenv("DB_PORT", "1433")
     name = os.getenv("DB_NAME")
     return f"mssql+pymssql://{user}:{password}@{server}:{port}/{name}"


DATABASE_URL = build_database_url()
SQL_ECHO = _env_flag("SQL_ECHO")

JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

CORS_ORIGINS = [origin for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", 10000))

# Saga compensation for partially applied assignments (off: the gap is only logged)
TENANCY_COMPENSATE_WRITES = _env_flag("TENANCY_COMPENSATE_WRITES")
# Fixed occupant threshold for the available-apartments query; unset compares max_occupants
LEGACY_AVAILABILITY_THRESHOLD = _env_int("LEGACY_AVAILABILITY_THRESHOLD")
