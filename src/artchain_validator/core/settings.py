"""Application settings and configuration.

This module defines all configuration options for the ArtChain validator.
Settings are loaded from environment variables with sensible defaults and are
fixed for the lifetime of the process.
"""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from artchain_validator.core.errors import ConfigurationError, InvalidIdentity
from artchain_validator.services.eip712 import SigningDomain
from artchain_validator.utils.encoding import parse_address


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="ArtChain Validator", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # HTTP server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8080, alias="PORT")

    # Signing key and EIP-712 domain
    validator_privkey: SecretStr = Field(alias="VALIDATOR_PRIVKEY")
    chain_id: int = Field(default=11_155_111, ge=0, alias="CHAIN_ID")
    verifying_contract: str = Field(alias="VERIFYING_CONTRACT")
    eip712_name: str = Field(default="ArtChain", alias="EIP712_NAME")
    eip712_version: str = Field(default="1", alias="EIP712_VERSION")

    # Comma-separated creator addresses approved at startup
    allowlist: str = Field(default="", alias="ALLOWLIST")

    # Allowlist administration (disabled unless a secret is configured)
    admin_secret_key: SecretStr | None = Field(default=None, alias="ADMIN_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    admin_token_expire_minutes: int = Field(default=60, alias="ADMIN_TOKEN_EXPIRE_MINUTES")

    # Lock striping for the dedup and nonce stores
    lock_stripes: int = Field(default=64, ge=1, alias="LOCK_STRIPES")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def allowlist_entries(self) -> list[str]:
        """Return the raw allowlist entries, trimmed, with empty items dropped.

        Returns:
            Address strings in the order they were configured
        """
        return [item.strip() for item in self.allowlist.split(",") if item.strip()]

    @property
    def allowlist_addresses(self) -> list[bytes]:
        """Return the configured creators as raw 20-byte addresses.

        Raises:
            ConfigurationError: If any entry is not a valid address
        """
        try:
            return [parse_address(entry, "ALLOWLIST entry") for entry in self.allowlist_entries]
        except InvalidIdentity as err:
            raise ConfigurationError(str(err)) from err

    @property
    def signing_domain(self) -> SigningDomain:
        """Return the EIP-712 domain every permit is signed under."""
        try:
            contract = parse_address(self.verifying_contract, "VERIFYING_CONTRACT")
        except InvalidIdentity as err:
            raise ConfigurationError(str(err)) from err
        return SigningDomain(
            name=self.eip712_name,
            version=self.eip712_version,
            chain_id=self.chain_id,
            verifying_contract=contract,
        )

    @property
    def admin_enabled(self) -> bool:
        """Return True when the allowlist administration API is enabled."""
        return self.admin_secret_key is not None and bool(
            self.admin_secret_key.get_secret_value()
        )


settings = Settings()  # type: ignore[call-arg]
