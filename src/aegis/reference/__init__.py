"""Read-only reference data: pattern libraries, regulations, trusted issuers."""

from aegis.reference.base import SEVERITY_ORDER, Severity, YAMLReferenceData
from aegis.reference.pii_patterns import (
    PIIPattern,
    PIIPatternLibrary,
    SecretPatternLibrary,
    compile_pattern,
    default_pii_library,
    default_secret_library,
)
from aegis.reference.regulations import (
    CatalogSummary,
    FrameworkSummary,
    RegulationCatalog,
    RegulationFramework,
    Requirement,
    RiskBand,
    RiskMatrix,
    catalog_summary,
    default_regulation_catalog,
)
from aegis.reference.trusted_issuers import (
    TrustedIssuerRegistry,
    default_trusted_issuers,
)

__all__ = [
    "SEVERITY_ORDER",
    "CatalogSummary",
    "FrameworkSummary",
    "PIIPattern",
    "PIIPatternLibrary",
    "RegulationCatalog",
    "RegulationFramework",
    "Requirement",
    "RiskBand",
    "RiskMatrix",
    "SecretPatternLibrary",
    "Severity",
    "TrustedIssuerRegistry",
    "YAMLReferenceData",
    "catalog_summary",
    "compile_pattern",
    "default_pii_library",
    "default_regulation_catalog",
    "default_secret_library",
    "default_trusted_issuers",
]
