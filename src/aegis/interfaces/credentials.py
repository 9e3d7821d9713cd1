"""Credential verification request shape."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from aegis.credentials.types import (
    ValidationOptions,
    ValidationResult,
    VerifiableCredential,
)
from aegis.credentials.validator import CredentialValidator


class CredentialVerifyRequest(BaseModel):
    """A credential and the validation options to apply."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    credential: VerifiableCredential
    options: ValidationOptions | None = None


def verify_credential(
    request: CredentialVerifyRequest,
    validator: CredentialValidator | None = None,
    now: datetime | None = None,
) -> ValidationResult:
    """Validate the requested credential.

    Signature verification is simulated; see ``aegis.credentials.validator``.
    """
    validator = validator or CredentialValidator()
    return validator.validate(request.credential, request.options, now=now)
