# src/artchain_validator/schemas/permit.py
"""Request and response schemas for the validate-and-sign endpoint."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from artchain_validator.services.validator import SignedPermit
from artchain_validator.utils.encoding import to_0x_hex

UINT64_MAX = 2**64 - 1


class ValidateRequest(BaseModel):
    """Mint request submitted for validation and signing.

    Identities and hashes are kept as strings here; parsing them is part of
    the validation pipeline so malformed values map to a 400 rather than 422.
    """

    creator: str = Field(..., description="Creator address that must be allowlisted")
    to: str = Field(..., description="Recipient address of the minted token")
    uri: str = Field(..., description="Metadata URI; only its keccak256 hash is signed")
    sha256: str = Field(
        ...,
        validation_alias=AliasChoices("sha256", "contentHash"),
        description="0x-prefixed 32-byte content hash",
    )
    nonce: str | None = Field(
        None,
        description="Explicit decimal nonce; when omitted a per-recipient nonce is issued",
    )
    deadline: int = Field(..., ge=0, le=UINT64_MAX, description="Permit expiry, opaque here")


class MintPermitOut(BaseModel):
    """Permit fields echoed back in canonical hex and decimal form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    to: str
    uri_hash: str
    art_hash: str
    nonce: str
    deadline: str


class ValidateResponse(BaseModel):
    """Signed permit returned to the caller."""

    permit: MintPermitOut
    signature: str = Field(..., description="0x-prefixed 65-byte r||s||v signature")
    validator: str = Field(..., description="Address of the signing validator")

    @classmethod
    def from_signed(cls, signed: SignedPermit) -> ValidateResponse:
        permit = signed.permit
        return cls(
            permit=MintPermitOut(
                to=to_0x_hex(permit.to),
                uri_hash=to_0x_hex(permit.uri_hash),
                art_hash=to_0x_hex(permit.art_hash),
                nonce=str(permit.nonce),
                deadline=str(permit.deadline),
            ),
            signature=to_0x_hex(signed.signature),
            validator=signed.signer.lower(),
        )


class ErrorResponse(BaseModel):
    """Body returned for rejected requests."""

    detail: str
    code: str
