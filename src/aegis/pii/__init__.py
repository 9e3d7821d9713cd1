"""PII detection and redaction."""

from aegis.pii.detector import PIIDetector, build_recommendations, line_and_column
from aegis.pii.redaction import (
    apply_redactions,
    placeholder,
    redact_value,
    redaction_spans,
)
from aegis.pii.types import (
    ContentType,
    DetectOptions,
    MatchLocation,
    PIIDetectResult,
    PIIMatch,
    SeverityCounts,
)

__all__ = [
    "ContentType",
    "DetectOptions",
    "MatchLocation",
    "PIIDetectResult",
    "PIIDetector",
    "PIIMatch",
    "SeverityCounts",
    "apply_redactions",
    "build_recommendations",
    "line_and_column",
    "placeholder",
    "redact_value",
    "redaction_spans",
]
