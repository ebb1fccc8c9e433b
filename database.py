# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration (Azure SQL by default, any URL via DATABASE_URL)
- Session factory shared by the document store
- Connection utilities

Usage:
     from database import get_document_store

     # In FastAPI routes:
     @router.get("/apartments")
     def list_apartments(store: DocumentStore = Depends(get_document_store)):
          return ApartmentService(store).get_all_apartments()
"""
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool

import config
from services.document_store import SqlDocumentStore

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = create_engine(
     config.DATABASE_URL,
     poolclass=QueuePool,
     pool_size=5,
     max_overflow=10,
     pool_timeout=30,
     pool_recycle=1800,  # Recycle connections after 30 minutes
     pool_pre_ping=True,
     echo=config.SQL_ECHO,
)

# Session factory
SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)

_store = SqlDocumentStore(SessionLocal)


def get_document_store() -> SqlDocumentStore:
     """
     FastAPI dependency that provides the document store.

     The store opens one session per operation, so there is nothing to
     close at the end of the request.
     """
     return _store


def check_connection() -> bool:
     """
     Test database connectivity.

     Returns:
          bool: True if connection successful, False otherwise
     """
     try:
          with engine.connect() as conn:
               conn.execute(text("SELECT 1"))
          return True
     except Exception as e:
          logger.error("Database connection failed: %s", e)
          return False
