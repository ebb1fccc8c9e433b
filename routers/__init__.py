# routers/__init__.py
from .apartments import router as apartments_router
from .tenancies import router as tenancies_router
from .leases import router as leases_router

__all__ = [
     "apartments_router",
     "tenancies_router",
     "leases_router",
]
