# src/artchain_validator/scripts/admin_token.py
"""Mint a bearer token for the allowlist administration API.

Usage:
    python -m artchain_validator.scripts.admin_token [--minutes N]
"""

from __future__ import annotations

import argparse
import sys
from datetime import UTC, datetime, timedelta

from jose import jwt

from artchain_validator.api.v1.dependencies import ADMIN_SCOPE, ADMIN_SUBJECT
from artchain_validator.core.settings import Settings, settings


def create_admin_token(config: Settings, minutes: int | None = None) -> str:
    """Create a signed admin JWT.

    Raises:
        RuntimeError: If ADMIN_SECRET_KEY is not configured
    """
    if not config.admin_enabled:
        raise RuntimeError("ADMIN_SECRET_KEY is not set; allowlist administration is disabled")
    lifetime = config.admin_token_expire_minutes if minutes is None else minutes
    claims: dict[str, object] = {
        "sub": ADMIN_SUBJECT,
        "scope": ADMIN_SCOPE,
        "exp": datetime.now(UTC) + timedelta(minutes=lifetime),
    }
    secret = config.admin_secret_key.get_secret_value()  # type: ignore[union-attr]
    token: str = jwt.encode(claims, secret, algorithm=config.jwt_algorithm)
    return token


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0] if __doc__ else None)
    parser.add_argument("--minutes", type=int, default=None, help="token lifetime in minutes")
    args = parser.parse_args(argv)
    try:
        print(create_admin_token(settings, args.minutes))
    except RuntimeError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
