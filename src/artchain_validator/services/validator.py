"""Validate-and-sign pipeline for mint permits."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from artchain_validator.core.errors import (
    DuplicateContent,
    MalformedInput,
    NotAuthorized,
    SigningFailure,
)
from artchain_validator.services.allowlist import AllowlistStore
from artchain_validator.services.eip712 import MintPermit, SigningDomain, build_digest, hash_uri
from artchain_validator.services.replay import ContentDedupStore, NonceRegistry
from artchain_validator.services.signer import Signer
from artchain_validator.utils.encoding import (
    UINT256_MAX,
    parse_address,
    parse_bytes32,
    parse_uint256,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedPermit:
    """Outcome of a successful validation: the permit and its signature."""

    permit: MintPermit
    signature: bytes
    signer: str


class PermitValidator:
    """Run the allowlist, dedup and nonce checks, then sign the permit.

    Each request is terminal on its first failure. State changes happen only
    when the fingerprint is admitted and when an auto nonce is issued; both
    are final and are not rolled back if signing later fails.
    """

    def __init__(
        self,
        *,
        domain: SigningDomain,
        signer: Signer,
        allowlist: AllowlistStore,
        dedup: ContentDedupStore,
        nonces: NonceRegistry,
    ) -> None:
        self.domain = domain
        self.signer = signer
        self.allowlist = allowlist
        self.dedup = dedup
        self.nonces = nonces

    def validate(
        self,
        *,
        creator: str,
        to: str,
        uri: str,
        content_hash: str,
        deadline: int,
        nonce: str | None = None,
    ) -> SignedPermit:
        """Validate a mint request and return the signed permit.

        Args:
            creator: Hex address of the creator, checked against the allowlist
            to: Hex address of the mint recipient
            uri: Metadata URI, hashed with keccak256 and never stored
            content_hash: Hex-encoded 32-byte content fingerprint
            deadline: Opaque expiry passed through to the permit
            nonce: Optional explicit decimal nonce; bypasses the nonce registry

        Returns:
            The signed permit

        Raises:
            MalformedInput: Unparseable identity, hash, nonce, deadline or uri
            NotAuthorized: Creator is not allowlisted
            DuplicateContent: Fingerprint was admitted before
            SigningFailure: Digest construction or signing failed
        """
        creator_addr = parse_address(creator, "creator")
        recipient = parse_address(to, "to")
        fingerprint = parse_bytes32(content_hash, "sha256")
        explicit_nonce = parse_uint256(nonce, "nonce") if nonce is not None else None
        if (
            isinstance(deadline, bool)
            or not isinstance(deadline, int)
            or not 0 <= deadline <= UINT256_MAX
        ):
            raise MalformedInput("invalid deadline: expected unsigned integer")
        try:
            uri_hash = hash_uri(uri)
        except UnicodeEncodeError as err:
            raise MalformedInput("invalid uri: not encodable as UTF-8") from err

        if not self.allowlist.is_allowed(creator_addr):
            logger.info("Rejected creator 0x%s: not allowlisted", creator_addr.hex())
            raise NotAuthorized("creator not allowlisted")

        if not self.dedup.admit(fingerprint):
            logger.info("Rejected duplicate art hash 0x%s", fingerprint.hex())
            raise DuplicateContent("duplicate art hash")

        if explicit_nonce is None:
            resolved_nonce = self.nonces.next_nonce(recipient)
        else:
            resolved_nonce = explicit_nonce

        try:
            permit = MintPermit(
                to=recipient,
                uri_hash=uri_hash,
                art_hash=fingerprint,
                nonce=resolved_nonce,
                deadline=deadline,
            )
            digest = build_digest(permit, self.domain)
            result = self.signer.sign(digest)
        except Exception as err:
            logger.error(
                "Signing failed for art hash 0x%s (nonce %d to 0x%s stays consumed)",
                fingerprint.hex(),
                resolved_nonce,
                recipient.hex(),
                exc_info=True,
            )
            raise SigningFailure(f"signing failed: {err}") from err

        logger.info(
            "Signed permit to=0x%s nonce=%d uriHash=0x%s artHash=0x%s",
            recipient.hex(),
            resolved_nonce,
            uri_hash.hex(),
            fingerprint.hex(),
        )
        return SignedPermit(permit=permit, signature=result.signature, signer=result.signer)
