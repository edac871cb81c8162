"""Process-scoped construction of the permit validator."""

from __future__ import annotations

import logging
from threading import Lock

from artchain_validator.core.errors import ConfigurationError
from artchain_validator.core.settings import Settings, settings
from artchain_validator.services.allowlist import AllowlistStore
from artchain_validator.services.replay import ContentDedupStore, NonceRegistry
from artchain_validator.services.signer import Signer
from artchain_validator.services.validator import PermitValidator

logger = logging.getLogger(__name__)

_validator: PermitValidator | None = None
_validator_lock = Lock()


def build_validator(config: Settings) -> PermitValidator:
    """Create the signer, domain and stores from configuration.

    Raises:
        ConfigurationError: If the key, contract address or an allowlist
            entry cannot be parsed
    """
    try:
        signer = Signer(config.validator_privkey.get_secret_value())
    except Exception as err:
        # never echo the key material itself
        raise ConfigurationError("VALIDATOR_PRIVKEY is not a valid secp256k1 key") from err

    domain = config.signing_domain
    validator = PermitValidator(
        domain=domain,
        signer=signer,
        allowlist=AllowlistStore(config.allowlist_addresses),
        dedup=ContentDedupStore(config.lock_stripes),
        nonces=NonceRegistry(config.lock_stripes),
    )
    logger.info(
        "Validator %s ready for chain %d contract 0x%s with %d allowlisted creators",
        signer.address,
        domain.chain_id,
        domain.verifying_contract.hex(),
        len(validator.allowlist),
    )
    return validator


def get_validator() -> PermitValidator:
    """Return the process-wide validator, building it on first use."""
    global _validator
    if _validator is None:
        with _validator_lock:
            if _validator is None:
                _validator = build_validator(settings)
    return _validator


def reset_validator() -> None:
    """Drop the process-wide validator so the next call rebuilds it."""
    global _validator
    with _validator_lock:
        _validator = None
