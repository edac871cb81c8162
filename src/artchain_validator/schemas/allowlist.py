# src/artchain_validator/schemas/allowlist.py
"""Schemas for the allowlist administration API."""

from pydantic import BaseModel


class AllowlistResponse(BaseModel):
    """Current allowlist members as lowercase 0x addresses."""

    members: list[str]
    size: int


class AllowlistChange(BaseModel):
    """Outcome of an add or remove call."""

    address: str
    changed: bool
    size: int
