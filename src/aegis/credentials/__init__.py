"""W3C Verifiable Credential validation."""

from aegis.credentials.types import (
    VC_BASE_CONTEXT,
    VC_BASE_TYPE,
    CredentialSummary,
    IssuerRef,
    Proof,
    ValidationCheck,
    ValidationOptions,
    ValidationResult,
    VerifiableCredential,
)
from aegis.credentials.validator import (
    SIMULATED_SIGNATURE_DETAILS,
    CredentialValidator,
    parse_timestamp,
)

__all__ = [
    "SIMULATED_SIGNATURE_DETAILS",
    "VC_BASE_CONTEXT",
    "VC_BASE_TYPE",
    "CredentialSummary",
    "CredentialValidator",
    "IssuerRef",
    "Proof",
    "ValidationCheck",
    "ValidationOptions",
    "ValidationResult",
    "VerifiableCredential",
    "parse_timestamp",
]
