"""Per-requirement compliance evaluators.

Each evaluator applies keyword heuristics to a lower-cased copy of the
content. These are coarse signals meant to flag content for human review,
not authoritative determinations.

Evaluators are looked up by requirement id in ``EVALUATORS``. Requirements
without an entry fall back to ``default_evaluator``, so every requirement
always yields exactly one verdict.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from aegis.compliance.types import ComplianceContentType, FindingStatus


@dataclass(frozen=True, slots=True)
class EvaluationInput:
    """Content handed to an evaluator.

    Attributes:
        text: Lower-cased content
        content_type: Kind of content being evaluated

    """

    text: str
    content_type: ComplianceContentType

    def mentions(self, *keywords: str) -> bool:
        """Check whether any keyword occurs in the text."""
        return any(keyword in self.text for keyword in keywords)


@dataclass(frozen=True, slots=True)
class Verdict:
    """Status and explanation produced by an evaluator."""

    status: FindingStatus
    details: str
    remediation: str | None = None


Evaluator = Callable[[EvaluationInput], Verdict]

DEFAULT_DETAILS: Final[str] = (
    "Automated check not available for this requirement - manual review recommended"
)


def default_evaluator(content: EvaluationInput) -> Verdict:
    """Fallback for requirements without a specific evaluator."""
    return Verdict("needs_review", DEFAULT_DETAILS)


# GDPR


def evaluate_consent(content: EvaluationInput) -> Verdict:
    """GDPR-001: consent mechanism around personal data processing."""
    if content.mentions("consent") and content.mentions("checkbox", "agreement"):
        return Verdict("compliant", "Consent mechanism detected in content")
    if (
        content.content_type == "code"
        and content.mentions("personal")
        and not content.mentions("consent")
    ):
        return Verdict(
            "non_compliant",
            "Personal data processing detected without consent mechanism",
            "Add consent collection and validation before processing personal data",
        )
    return Verdict(
        "needs_review",
        "Unable to determine consent mechanism - manual review required",
    )


def evaluate_data_minimisation(content: EvaluationInput) -> Verdict:
    """GDPR-002: collect only what is necessary."""
    collects_data = content.mentions("collect", "gather", "store")
    if collects_data and content.mentions("only") and content.mentions("necessary"):
        return Verdict(
            "compliant", "Data minimization principle appears to be followed"
        )
    if collects_data and content.mentions("all", "everything"):
        return Verdict(
            "non_compliant",
            "Appears to collect more data than necessary",
            "Review data collection to ensure only necessary data is collected",
        )
    return Verdict(
        "needs_review", "Data collection scope unclear - review for minimization"
    )


def evaluate_security(content: EvaluationInput) -> Verdict:
    """GDPR-004: encryption and access control."""
    has_encryption = content.mentions("encrypt", "aes", "crypto")
    has_access_control = content.mentions("auth", "permission", "role")
    if has_encryption and has_access_control:
        return Verdict(
            "compliant", "Encryption and access control mechanisms detected"
        )
    if not has_encryption and content.mentions("password", "personal"):
        return Verdict(
            "non_compliant",
            "Sensitive data handling without encryption detected",
            "Implement encryption for sensitive data at rest and in transit",
        )
    return Verdict("needs_review", "Security measures require verification")


# AML


def evaluate_customer_due_diligence(content: EvaluationInput) -> Verdict:
    """AML-001: identity verification of customers."""
    if content.mentions("kyc", "identity", "verification"):
        return Verdict("compliant", "Customer due diligence process detected")
    if content.mentions("customer", "user", "account"):
        return Verdict(
            "needs_review",
            "Customer handling detected - verify CDD is performed",
            "Ensure identity verification is performed before establishing "
            "business relationship",
        )
    return Verdict("compliant", "No customer processing detected requiring CDD")


def evaluate_enhanced_due_diligence(content: EvaluationInput) -> Verdict:
    """AML-002: enhanced checks for PEPs and high-risk customers."""
    if content.mentions("enhanced", "pep", "high-risk"):
        return Verdict("compliant", "Enhanced due diligence considerations found")
    return Verdict("needs_review", "Verify EDD process for high-risk scenarios")


def evaluate_sanctions_screening(content: EvaluationInput) -> Verdict:
    """AML-004: sanctions list screening."""
    if content.mentions("sanctions", "ofac", "screening"):
        return Verdict("compliant", "Sanctions screening mechanism detected")
    if content.mentions("customer", "transaction"):
        return Verdict(
            "needs_review",
            "Customer/transaction processing without clear sanctions screening",
            "Implement sanctions list screening for all customers and transactions",
        )
    return Verdict(
        "compliant", "No processing requiring sanctions screening detected"
    )


# eIDAS


def evaluate_identity_assurance(content: EvaluationInput) -> Verdict:
    """EIDAS-001: high-assurance identity proofing."""
    if content.mentions("identity", "biometric", "liveness") and content.mentions(
        "verification"
    ):
        return Verdict(
            "compliant", "High-assurance identity verification patterns detected"
        )
    return Verdict(
        "needs_review", "Verify identity proofing meets high LoA requirements"
    )


def evaluate_wallet_support(content: EvaluationInput) -> Verdict:
    """EIDAS-002: verifiable credential and wallet support."""
    if content.mentions("verifiable", "credential", "wallet"):
        return Verdict("compliant", "Verifiable credential support detected")
    return Verdict("needs_review", "Verify EUDIW compatibility if applicable")


# EU AI Act


def evaluate_human_oversight(content: EvaluationInput) -> Verdict:
    """AI-001: human oversight of automated decisions."""
    if content.mentions("human") and content.mentions(
        "oversight", "review", "approval", "override"
    ):
        return Verdict("compliant", "Human oversight mechanism detected")
    if content.mentions(
        "automated decision", "auto-approve", "auto_approve", "auto-reject", "auto_reject"
    ):
        return Verdict(
            "non_compliant",
            "Automated decision-making without human oversight detected",
            "Route adverse automated decisions to a human reviewer able to "
            "override them",
        )
    return Verdict(
        "needs_review", "Verify human oversight for AI-assisted decisions"
    )


EVALUATORS: Final[Mapping[str, Evaluator]] = MappingProxyType(
    {
        "GDPR-001": evaluate_consent,
        "GDPR-002": evaluate_data_minimisation,
        "GDPR-004": evaluate_security,
        "AML-001": evaluate_customer_due_diligence,
        "AML-002": evaluate_enhanced_due_diligence,
        "AML-004": evaluate_sanctions_screening,
        "EIDAS-001": evaluate_identity_assurance,
        "EIDAS-002": evaluate_wallet_support,
        "AI-001": evaluate_human_oversight,
    }
)


def evaluator_for(requirement_id: str) -> Evaluator:
    """Get the evaluator for a requirement, or the default evaluator."""
    return EVALUATORS.get(requirement_id, default_evaluator)
