"""Error taxonomy for permit validation.

Every request-path failure is a subclass of `ValidatorError` and carries the
HTTP status and machine-readable code the API layer reports. None of them is
fatal to the process.
"""

from __future__ import annotations

from fastapi import status


class ValidatorError(RuntimeError):
    """Base exception raised when a validate-and-sign request is rejected."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "validator_error"


class MalformedInput(ValidatorError):
    """Raised when a hash or nonce string cannot be parsed.

    No state has been touched when this is raised.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    code = "malformed_input"


class InvalidIdentity(MalformedInput):
    """Raised when an account identity is not a 20-byte hex address."""

    code = "invalid_identity"


class NotAuthorized(ValidatorError):
    """Raised when the creator is not on the allowlist."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "not_authorized"


class DuplicateContent(ValidatorError):
    """Raised when the content fingerprint was already admitted."""

    status_code = status.HTTP_409_CONFLICT
    code = "duplicate_content"


class SigningFailure(ValidatorError):
    """Raised when digest construction or signing fails.

    The fingerprint and nonce consumed earlier in the request stay consumed.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "signing_failure"


class ConfigurationError(RuntimeError):
    """Raised at startup when process configuration cannot be parsed."""
