"""Structural validation of W3C Verifiable Credentials.

Signature verification is simulated. The validator checks that a proof is
present and structurally complete; it never verifies the signature
cryptographically. Callers must not treat a passing "Signature
Verification" check as proof of authenticity.
"""

import logging
from datetime import UTC, datetime, timedelta

from aegis.config import EngineConfiguration
from aegis.credentials.types import (
    VC_BASE_CONTEXT,
    VC_BASE_TYPE,
    CredentialSummary,
    ValidationCheck,
    ValidationOptions,
    ValidationResult,
    VerifiableCredential,
)
from aegis.reference.trusted_issuers import (
    TrustedIssuerRegistry,
    default_trusted_issuers,
)

logger = logging.getLogger(__name__)

SIMULATED_SIGNATURE_DETAILS = (
    "Signature verification simulated "
    "(would verify cryptographically in production)"
)

# Failing these only warns; they never decide validity
INFORMATIONAL_CHECKS = frozenset({"Issuer Trust", "Credential Subject"})


def parse_timestamp(value: str) -> datetime | None:
    """Parse an ISO 8601 date or timestamp; naive values are taken as UTC.

    Returns None when the value cannot be parsed.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


class _Report:
    """Accumulates checks, warnings and errors for one validation run."""

    def __init__(self) -> None:
        self.checks: list[ValidationCheck] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def check(self, name: str, passed: bool, details: str) -> None:
        self.checks.append(ValidationCheck(name=name, passed=passed, details=details))


class CredentialValidator:
    """Runs a fixed sequence of structural, trust and expiry checks.

    Checks are reported in order: Context, Type, Required Types, Issuance
    Date, Expiry, Issuer Trust, Proof, Signature Verification, Credential
    Subject. Optional checks are omitted when disabled. Issuer Trust and
    Credential Subject failures add warnings but leave the credential valid.
    """

    def __init__(
        self,
        trusted_issuers: TrustedIssuerRegistry | None = None,
        config: EngineConfiguration | None = None,
    ) -> None:
        """Initialise the validator.

        Args:
            trusted_issuers: Trusted issuer list; the bundled list when None
            config: Engine configuration; defaults when None

        """
        self._trusted_issuers = trusted_issuers or default_trusted_issuers()
        self._config = config or EngineConfiguration()

    def validate(
        self,
        credential: VerifiableCredential,
        options: ValidationOptions | None = None,
        now: datetime | None = None,
    ) -> ValidationResult:
        """Validate a credential.

        Args:
            credential: The credential to validate
            options: Which optional checks to run; all enabled when None
            now: Reference time for date checks; the current UTC time when None

        Returns:
            The verdict with per-check diagnostics

        """
        options = options or ValidationOptions()
        now = now or datetime.now(UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        report = _Report()

        self._check_context(credential, report)
        self._check_type(credential, options, report)
        self._check_issuance(credential, now, report)
        if options.check_expiry:
            self._check_expiry(credential, now, report)
        if options.check_issuer_trust:
            self._check_issuer_trust(credential, report)
        if options.verify_signature:
            self._check_proof(credential, report)
        self._check_subject(credential, report)

        is_valid = not report.errors and all(
            c.passed for c in report.checks if c.name not in INFORMATIONAL_CHECKS
        )
        logger.debug(
            "Credential from %s is %s (%d errors, %d warnings)",
            credential.issuer_id,
            "valid" if is_valid else "invalid",
            len(report.errors),
            len(report.warnings),
        )

        return ValidationResult(
            is_valid=is_valid,
            issuer=credential.issuer_id,
            credential_id=credential.id or credential.subject_id,
            checks=tuple(report.checks),
            warnings=tuple(report.warnings),
            errors=tuple(report.errors),
            credential_summary=CredentialSummary(
                types=credential.type,
                subject=credential.subject_id,
                issuance_date=credential.issuance_date,
                expiration_date=credential.expiration_date,
                has_proof=credential.proof is not None,
            ),
        )

    def _check_context(
        self, credential: VerifiableCredential, report: _Report
    ) -> None:
        if VC_BASE_CONTEXT in credential.context:
            report.check("Context", True, "Valid W3C Verifiable Credentials context")
            return
        report.check("Context", False, "Missing required W3C VC context")
        report.errors.append(f"Credential must include '{VC_BASE_CONTEXT}' context")

    def _check_type(
        self,
        credential: VerifiableCredential,
        options: ValidationOptions,
        report: _Report,
    ) -> None:
        if VC_BASE_TYPE in credential.type:
            report.check("Type", True, f"Credential types: {', '.join(credential.type)}")
        else:
            report.check("Type", False, f"Missing '{VC_BASE_TYPE}' type")
            report.errors.append(f"Credential must include '{VC_BASE_TYPE}' type")

        if not options.required_types:
            return
        missing = [t for t in options.required_types if t not in credential.type]
        if missing:
            report.check(
                "Required Types", False, f"Missing required types: {', '.join(missing)}"
            )
            report.errors.append(
                f"Missing required credential types: {', '.join(missing)}"
            )
        else:
            report.check(
                "Required Types",
                True,
                f"All required types present: {', '.join(options.required_types)}",
            )

    def _check_issuance(
        self, credential: VerifiableCredential, now: datetime, report: _Report
    ) -> None:
        issued = parse_timestamp(credential.issuance_date)
        if issued is not None and issued <= now:
            report.check("Issuance Date", True, f"Issued on {credential.issuance_date}")
            return
        report.check("Issuance Date", False, "Invalid or future issuance date")
        report.errors.append("Credential has invalid or future issuance date")

    def _check_expiry(
        self, credential: VerifiableCredential, now: datetime, report: _Report
    ) -> None:
        expiration = credential.expiration_date
        if expiration is None:
            report.check(
                "Expiry", True, "No expiration date (credential does not expire)"
            )
            report.warnings.append(
                "Credential has no expiration date - consider if this is appropriate"
            )
            return

        expires = parse_timestamp(expiration)
        if expires is None:
            report.check("Expiry", False, f"Invalid expiration date: {expiration}")
            report.errors.append(
                f"Credential has an invalid expiration date ({expiration})"
            )
            return

        if expires < now:
            report.check("Expiry", False, f"Credential expired on {expiration}")
            report.errors.append(f"Credential expired on {expiration}")
            return

        report.check("Expiry", True, f"Valid until {expiration}")
        warning_days = self._config.expiry_warning_days
        if expires < now + timedelta(days=warning_days):
            report.warnings.append(
                f"Credential expires within {warning_days} days ({expiration})"
            )

    def _check_issuer_trust(
        self, credential: VerifiableCredential, report: _Report
    ) -> None:
        issuer_id = credential.issuer_id
        if self._trusted_issuers.is_trusted(issuer_id):
            report.check("Issuer Trust", True, f"Issuer {issuer_id} is in trusted list")
            return
        report.check(
            "Issuer Trust", False, f"Issuer {issuer_id} is not in trusted list"
        )
        report.warnings.append(f"Issuer {issuer_id} is not in the trusted issuers list")

    def _check_proof(self, credential: VerifiableCredential, report: _Report) -> None:
        proof = credential.proof
        if proof is None:
            report.check("Proof", False, "No cryptographic proof present")
            report.errors.append("Credential has no cryptographic proof")
            return

        if not (proof.type and proof.verification_method):
            report.check("Proof", False, "Proof structure is incomplete")
            report.errors.append("Credential proof is missing required fields")
            return

        report.check(
            "Proof",
            True,
            f"Proof type: {proof.type}, method: {proof.verification_method}",
        )
        if proof.proof_value or proof.jws:
            report.check("Signature Verification", True, SIMULATED_SIGNATURE_DETAILS)

    def _check_subject(
        self, credential: VerifiableCredential, report: _Report
    ) -> None:
        if credential.credential_subject:
            report.check(
                "Credential Subject",
                True,
                f"Subject ID: {credential.subject_id or 'anonymous'}",
            )
        else:
            report.check("Credential Subject", False, "Credential subject is empty")
            report.warnings.append("Credential subject is empty")
