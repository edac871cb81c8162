"""Shared API dependencies for validator access and admin authentication."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from artchain_validator.core.settings import settings
from artchain_validator.services.oracle import get_validator
from artchain_validator.services.validator import PermitValidator

ADMIN_SUBJECT = "admin"
ADMIN_SCOPE = "allowlist:admin"

# auto_error disabled so a missing header yields 401 rather than 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_permit_validator() -> PermitValidator:
    """Return the process-wide permit validator."""
    return get_validator()


ValidatorDep = Annotated[PermitValidator, Depends(get_permit_validator)]


def require_admin(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> str:
    """Authenticate an allowlist administrator from a bearer JWT.

    Returns:
        The token subject

    Raises:
        HTTPException: 404 if administration is disabled, 401 if the token is
            missing, invalid, expired or lacks the admin scope
    """
    if not settings.admin_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    secret = settings.admin_secret_key.get_secret_value()  # type: ignore[union-attr]
    try:
        payload = jwt.decode(
            credentials.credentials,
            secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise unauthorized from err

    if payload.get("sub") != ADMIN_SUBJECT or payload.get("scope") != ADMIN_SCOPE:
        raise unauthorized
    return str(payload["sub"])


AdminDep = Annotated[str, Depends(require_admin)]
