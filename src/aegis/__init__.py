"""Aegis - deterministic compliance analysis engine.

This package provides PII detection and redaction, a rule engine for GDPR,
AML/KYC, eIDAS 2.0 and EU AI Act requirements, a likelihood x impact risk
scorer, and structural validation of W3C Verifiable Credentials.
"""

__version__ = "1.0.0"

from aegis.compliance import ComplianceRuleEngine
from aegis.config import EngineConfiguration
from aegis.credentials import CredentialValidator
from aegis.errors import (
    AegisError,
    AnalysisError,
    AnalysisInputError,
    ContentTooLargeError,
    EmptyRiskFactorsError,
    HookError,
    ReferenceDataError,
    ReferenceDataNotFoundError,
)
from aegis.pii import PIIDetector
from aegis.risk import RiskScorer

__all__ = [
    "AegisError",
    "AnalysisError",
    "AnalysisInputError",
    "ComplianceRuleEngine",
    "ContentTooLargeError",
    "CredentialValidator",
    "EmptyRiskFactorsError",
    "EngineConfiguration",
    "HookError",
    "PIIDetector",
    "ReferenceDataError",
    "ReferenceDataNotFoundError",
    "RiskScorer",
    "__version__",
]
