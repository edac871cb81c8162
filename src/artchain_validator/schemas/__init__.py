"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .allowlist import AllowlistChange, AllowlistResponse
from .permit import ErrorResponse, MintPermitOut, ValidateRequest, ValidateResponse

__all__ = [
    "AllowlistChange",
    "AllowlistResponse",
    "ErrorResponse",
    "MintPermitOut",
    "ValidateRequest",
    "ValidateResponse",
]
