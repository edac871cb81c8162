"""Validate-and-sign endpoint."""

from fastapi import APIRouter

from artchain_validator.api.v1.dependencies import ValidatorDep
from artchain_validator.schemas.permit import ErrorResponse, ValidateRequest, ValidateResponse

router = APIRouter(tags=["permits"])

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Malformed identity, hash or nonce"},
    403: {"model": ErrorResponse, "description": "Creator not allowlisted"},
    409: {"model": ErrorResponse, "description": "Content hash already admitted"},
    500: {"model": ErrorResponse, "description": "Signing failed"},
}


@router.post(
    "/validate",
    response_model=ValidateResponse,
    summary="Validate a mint request and sign its permit",
    responses=_ERROR_RESPONSES,
)
def validate(payload: ValidateRequest, validator: ValidatorDep) -> ValidateResponse:
    """Check the allowlist and content dedup, assign a nonce and sign the permit.

    Declared synchronously so each request runs on the worker thread pool.
    """
    signed = validator.validate(
        creator=payload.creator,
        to=payload.to,
        uri=payload.uri,
        content_hash=payload.sha256,
        nonce=payload.nonce,
        deadline=payload.deadline,
    )
    return ValidateResponse.from_signed(signed)
