"""Allowlist administration endpoints."""

from fastapi import APIRouter

from artchain_validator.api.v1.dependencies import AdminDep, ValidatorDep
from artchain_validator.schemas.allowlist import AllowlistChange, AllowlistResponse
from artchain_validator.utils.encoding import parse_address, to_0x_hex

router = APIRouter(prefix="/admin/allowlist", tags=["admin"])


@router.get("", response_model=AllowlistResponse)
def list_allowlist(_admin: AdminDep, validator: ValidatorDep) -> AllowlistResponse:
    """Return the allowlisted creators in sorted order."""
    members = [to_0x_hex(member) for member in validator.allowlist.members()]
    return AllowlistResponse(members=members, size=len(members))


@router.put("/{address}", response_model=AllowlistChange)
def add_creator(address: str, _admin: AdminDep, validator: ValidatorDep) -> AllowlistChange:
    """Add a creator to the allowlist. Adding an existing member is a no-op."""
    creator = parse_address(address, "address")
    changed = validator.allowlist.add(creator)
    return AllowlistChange(
        address=to_0x_hex(creator), changed=changed, size=len(validator.allowlist)
    )


@router.delete("/{address}", response_model=AllowlistChange)
def remove_creator(address: str, _admin: AdminDep, validator: ValidatorDep) -> AllowlistChange:
    """Remove a creator from the allowlist. Removing a non-member is a no-op."""
    creator = parse_address(address, "address")
    changed = validator.allowlist.remove(creator)
    return AllowlistChange(
        address=to_0x_hex(creator), changed=changed, size=len(validator.allowlist)
    )
