"""System and transparency endpoints for the validator API."""

from __future__ import annotations

from fastapi import APIRouter

from artchain_validator.api.v1.dependencies import ValidatorDep
from artchain_validator.core.settings import settings
from artchain_validator.services.eip712 import (
    EIP712_DOMAIN_TYPE,
    MINT_PERMIT_TYPE,
    MINT_PERMIT_TYPEHASH,
    domain_separator,
)
from artchain_validator.utils.encoding import to_0x_hex

router = APIRouter(prefix="/system", tags=["system", "transparency"])


@router.get("/config")
async def get_public_config(validator: ValidatorDep) -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Contains what a verifier needs to reproduce permit digests. Excludes the
    signing key and admin secret.

    Args:
        validator: The process-wide permit validator

    Returns:
        Dictionary with app metadata, signer address, EIP-712 domain and type
        information, and allowlist size
    """
    domain = validator.domain
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "validator": validator.signer.address,
        "eip712": {
            "domain": {
                "name": domain.name,
                "version": domain.version,
                "chainId": domain.chain_id,
                "verifyingContract": to_0x_hex(domain.verifying_contract),
            },
            "domainType": EIP712_DOMAIN_TYPE,
            "domainSeparator": to_0x_hex(domain_separator(domain)),
            "permitType": MINT_PERMIT_TYPE,
            "permitTypeHash": to_0x_hex(MINT_PERMIT_TYPEHASH),
        },
        "allowlist": {
            "size": len(validator.allowlist),
            "admin_enabled": settings.admin_enabled,
        },
    }
