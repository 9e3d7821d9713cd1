"""Types for PII detection."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from aegis.reference.base import Severity

ContentType = Literal["code", "text", "config", "log"]


class MatchLocation(BaseModel):
    """Position of a match in the scanned content.

    ``start`` is inclusive and ``end`` exclusive. Line and column are
    1-based and only present when line numbers were requested.
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    line: int | None = None
    column: int | None = None


class PIIMatch(BaseModel):
    """A single PII value found in content."""

    model_config = ConfigDict(frozen=True)

    type: str
    description: str
    severity: Severity
    value: str
    redacted_value: str
    location: MatchLocation


class DetectOptions(BaseModel):
    """Options for a PII detection run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    content_type: ContentType = Field(
        default="text", description="Only influences the recommendations"
    )
    include_line_numbers: bool = True
    redact_matches: bool = False
    pattern_types: tuple[str, ...] | None = Field(
        default=None, description="Subset of pattern types to run; all when None"
    )


class SeverityCounts(BaseModel):
    """Match counts per severity."""

    model_config = ConfigDict(frozen=True)

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0


class PIIDetectResult(BaseModel):
    """Outcome of scanning content for PII.

    ``matches`` are ordered by start offset and ``matches_by_severity`` is an
    exact partition of them. ``redacted_content`` is only set when redaction
    was requested.
    """

    model_config = ConfigDict(frozen=True)

    has_pii: bool
    content_type: ContentType
    total_matches: int
    matches_by_severity: SeverityCounts
    matches: tuple[PIIMatch, ...]
    redacted_content: str | None = None
    recommendations: tuple[str, ...]
