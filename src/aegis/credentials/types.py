"""Types for W3C Verifiable Credential validation."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

VC_BASE_CONTEXT = "https://www.w3.org/2018/credentials/v1"
VC_BASE_TYPE = "VerifiableCredential"


class IssuerRef(BaseModel):
    """Issuer given as an object rather than a bare id."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    name: str | None = None


class Proof(BaseModel):
    """Proof block of a credential.

    Every field is optional so incomplete proofs can be reported rather
    than rejected at parse time.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
    )

    type: str | None = None
    created: str | None = None
    verification_method: str | None = None
    proof_purpose: str | None = None
    proof_value: str | None = None
    jws: str | None = None


class VerifiableCredential(BaseModel):
    """JSON-LD shaped W3C Verifiable Credential."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
    )

    context: tuple[str | dict[str, Any], ...] = Field(alias="@context")
    id: str | None = None
    type: tuple[str, ...]
    issuer: str | IssuerRef
    issuance_date: str
    expiration_date: str | None = None
    credential_subject: dict[str, Any]
    proof: Proof | None = None

    @field_validator("context", "type", mode="before")
    @classmethod
    def wrap_single_value(cls, value: Any) -> Any:  # noqa: ANN401
        """Accept a single string as a one-element list."""
        if isinstance(value, str):
            return (value,)
        return value

    @property
    def issuer_id(self) -> str:
        """Issuer id, whether the issuer is a string or an object."""
        return self.issuer if isinstance(self.issuer, str) else self.issuer.id

    @property
    def subject_id(self) -> str | None:
        """Id of the credential subject, when present."""
        subject_id = self.credential_subject.get("id")
        return subject_id if isinstance(subject_id, str) else None


class ValidationOptions(BaseModel):
    """Which optional checks to run."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
    )

    check_expiry: bool = True
    verify_signature: bool = True
    check_issuer_trust: bool = True
    required_types: tuple[str, ...] = ()


class ValidationCheck(BaseModel):
    """Outcome of one named check."""

    model_config = ConfigDict(frozen=True)

    name: str
    passed: bool
    details: str


class CredentialSummary(BaseModel):
    """Key facts about the validated credential."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, validate_by_name=True
    )

    types: tuple[str, ...]
    subject: str | None = None
    issuance_date: str
    expiration_date: str | None = None
    has_proof: bool


class ValidationResult(BaseModel):
    """Verdict and diagnostics for a credential.

    ``is_valid`` holds only when there are no errors and every check passed.
    Warnings never affect validity.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, validate_by_name=True
    )

    is_valid: bool
    issuer: str
    credential_id: str | None = None
    checks: tuple[ValidationCheck, ...]
    warnings: tuple[str, ...]
    errors: tuple[str, ...]
    credential_summary: CredentialSummary
