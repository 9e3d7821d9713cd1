"""Request/response shapes exchanged with callers.

Each operation validates its request model, delegates to one analysis
component and returns a serialisable response model.
"""

from aegis.interfaces.compliance import (
    SEVERITY_WEIGHTS,
    ComplianceCheckRequest,
    ComplianceCheckResponse,
    FrameworkResult,
    check_compliance,
    framework_score,
    score_risk_level,
)
from aegis.interfaces.credentials import CredentialVerifyRequest, verify_credential
from aegis.interfaces.pii import (
    PIIRedactResponse,
    PIIScanRequest,
    PIIScanResponse,
    Redaction,
    RuleBasedFindings,
    TypeFinding,
    redact_pii,
    scan_pii,
    scan_recommendations,
)
from aegis.interfaces.risk import RiskAssessmentRequest, assess_risk

__all__ = [
    "SEVERITY_WEIGHTS",
    "ComplianceCheckRequest",
    "ComplianceCheckResponse",
    "CredentialVerifyRequest",
    "FrameworkResult",
    "PIIRedactResponse",
    "PIIScanRequest",
    "PIIScanResponse",
    "Redaction",
    "RiskAssessmentRequest",
    "RuleBasedFindings",
    "TypeFinding",
    "assess_risk",
    "check_compliance",
    "framework_score",
    "redact_pii",
    "scan_pii",
    "scan_recommendations",
    "verify_credential",
]
