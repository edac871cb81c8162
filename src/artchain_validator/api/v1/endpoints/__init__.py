# src/artchain_validator/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .admin import router as admin_router
from .system import router as system_router
from .validate import router as validate_router

__all__ = [
    "admin_router",
    "system_router",
    "validate_router",
]
