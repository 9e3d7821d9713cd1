"""PII scan and redact request/response shapes."""

from collections import Counter
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from aegis.pii.detector import PIIDetector
from aegis.pii.redaction import apply_redactions, placeholder, redaction_spans
from aegis.pii.types import ContentType, DetectOptions, PIIMatch

ScanContext = Literal["code", "document", "message"]

MAX_SAMPLES = 3

_CONTENT_TYPES: dict[ScanContext, ContentType] = {
    "code": "code",
    "document": "text",
    "message": "text",
}


class PIIScanRequest(BaseModel):
    """Content submitted for scanning or redaction."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    content: str = Field(min_length=1)
    context: ScanContext = "code"


class TypeFinding(BaseModel):
    """Matches of one PII type."""

    model_config = ConfigDict(frozen=True)

    type: str
    count: int
    risk: Literal["high", "medium"]
    samples: tuple[str, ...] = Field(description="Up to three masked values")


class RuleBasedFindings(BaseModel):
    """Pattern-based findings grouped by type."""

    model_config = ConfigDict(frozen=True)

    findings: tuple[TypeFinding, ...]
    total_items: int


class PIIScanResponse(BaseModel):
    """Result of a PII scan."""

    model_config = ConfigDict(frozen=True)

    scanned: bool = True
    content_length: int
    context: ScanContext
    pii_detected: bool
    risk_level: Literal["low", "medium", "high"]
    rule_based: RuleBasedFindings
    recommendations: tuple[str, ...]


class Redaction(BaseModel):
    """Number of values of one type replaced by placeholders."""

    model_config = ConfigDict(frozen=True)

    type: str
    count: int


class PIIRedactResponse(BaseModel):
    """Result of a PII redaction."""

    model_config = ConfigDict(frozen=True)

    original_length: int
    redacted_length: int
    redacted_content: str
    redactions: tuple[Redaction, ...]
    total_redacted: int


def _counts_by_type(
    detector: PIIDetector, matches: tuple[PIIMatch, ...]
) -> list[tuple[str, int]]:
    counts = Counter(match.type for match in matches)
    return [(t, counts[t]) for t in detector.library.types if counts[t]]


def scan_recommendations(
    findings: tuple[TypeFinding, ...], context: ScanContext
) -> tuple[str, ...]:
    """Type-specific advice for a scan result."""
    if not findings:
        return ("No PII detected - content appears safe",)

    types = {finding.type for finding in findings}
    recommendations: list[str] = []
    if "api_key" in types:
        recommendations.append(
            "CRITICAL: Remove API keys and use environment variables"
        )
    if "password" in types:
        recommendations.append(
            "CRITICAL: Remove plain-text passwords and use a secret manager"
        )
    if "ssn" in types:
        recommendations.append("CRITICAL: SSN detected - must be tokenized or removed")
    if "credit_card" in types:
        recommendations.append(
            "CRITICAL: Credit card numbers must be tokenized (PCI-DSS requirement)"
        )
    if "email" in types:
        recommendations.append(
            "Use placeholder emails in code (e.g., user@example.com)"
            if context == "code"
            else "Consider if email collection is necessary (GDPR minimization)"
        )
    if "phone" in types:
        recommendations.append(
            "Phone numbers should be stored encrypted with access controls"
        )
    recommendations.append(
        "Run PII scan in CI/CD pipeline to prevent accidental commits"
    )
    return tuple(recommendations)


def scan_pii(
    request: PIIScanRequest, detector: PIIDetector | None = None
) -> PIIScanResponse:
    """Scan content and group the findings by PII type.

    Types with a critical pattern severity are reported as ``high`` risk,
    all others as ``medium``.
    """
    detector = detector or PIIDetector()
    result = detector.detect(
        request.content,
        DetectOptions(
            content_type=_CONTENT_TYPES[request.context], include_line_numbers=False
        ),
    )

    findings = tuple(
        TypeFinding(
            type=pattern_type,
            count=count,
            risk=(
                "high"
                if detector.library.get(pattern_type).severity == "critical"
                else "medium"
            ),
            samples=tuple(
                m.redacted_value for m in result.matches if m.type == pattern_type
            )[:MAX_SAMPLES],
        )
        for pattern_type, count in _counts_by_type(detector, result.matches)
    )

    if any(finding.risk == "high" for finding in findings):
        risk_level: Literal["low", "medium", "high"] = "high"
    elif findings:
        risk_level = "medium"
    else:
        risk_level = "low"

    return PIIScanResponse(
        content_length=len(request.content),
        context=request.context,
        pii_detected=result.has_pii,
        risk_level=risk_level,
        rule_based=RuleBasedFindings(
            findings=findings, total_items=result.total_matches
        ),
        recommendations=scan_recommendations(findings, request.context),
    )


def redact_pii(
    request: PIIScanRequest, detector: PIIDetector | None = None
) -> PIIRedactResponse:
    """Replace every detected value with a ``[REDACTED_<TYPE>]`` placeholder.

    Overlapping matches collapse into one placeholder named after the
    longest of them, so counts reflect the placeholders written rather than
    every detected match.
    """
    detector = detector or PIIDetector()
    result = detector.detect(
        request.content,
        DetectOptions(
            content_type=_CONTENT_TYPES[request.context], include_line_numbers=False
        ),
    )
    redacted_matches = tuple(match for _, _, match in redaction_spans(result.matches))
    redactions = tuple(
        Redaction(type=pattern_type, count=count)
        for pattern_type, count in _counts_by_type(detector, redacted_matches)
    )
    redacted = apply_redactions(request.content, result.matches, placeholder)

    return PIIRedactResponse(
        original_length=len(request.content),
        redacted_length=len(redacted),
        redacted_content=redacted,
        redactions=redactions,
        total_redacted=len(redacted_matches),
    )
