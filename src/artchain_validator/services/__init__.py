# src/artchain_validator/services/__init__.py
"""Business logic services for the ArtChain validator."""

from .allowlist import AllowlistStore
from .replay import ContentDedupStore, NonceRegistry
from .signer import Signer
from .validator import PermitValidator, SignedPermit

__all__ = [
    "AllowlistStore",
    "ContentDedupStore",
    "NonceRegistry",
    "Signer",
    "PermitValidator",
    "SignedPermit",
]
