"""Regex-based PII detector."""

import logging

from aegis.config import EngineConfiguration
from aegis.errors import ContentTooLargeError
from aegis.pii.redaction import apply_redactions, redact_value
from aegis.pii.types import (
    ContentType,
    DetectOptions,
    MatchLocation,
    PIIDetectResult,
    PIIMatch,
    SeverityCounts,
)
from aegis.reference.pii_patterns import (
    PIIPattern,
    PIIPatternLibrary,
    default_pii_library,
)

logger = logging.getLogger(__name__)

_CRITICAL_RECOMMENDATIONS = (
    "CRITICAL: Remove or encrypt all critical PII before storing or transmitting",
    "Use tokenization or data masking for sensitive identifiers",
)
_HIGH_RECOMMENDATIONS = (
    "HIGH: Consider pseudonymization for personal contact information",
    "Implement access controls for data containing personal information",
)
_SOURCE_RECOMMENDATIONS = (
    "Never hardcode sensitive data in source code or configuration files",
    "Use environment variables or secret management services",
)
_LOG_RECOMMENDATIONS = (
    "Configure log redaction to automatically mask PII patterns",
    "Review log retention policies for GDPR compliance",
)
_DPIA_RECOMMENDATION = (
    "Conduct a Data Protection Impact Assessment (DPIA) for processing this data"
)


def line_and_column(content: str, position: int) -> tuple[int, int]:
    """Convert a character offset to a 1-based (line, column) pair."""
    line = content.count("\n", 0, position) + 1
    column = position - (content.rfind("\n", 0, position) + 1) + 1
    return line, column


def build_recommendations(
    counts: SeverityCounts, content_type: ContentType, total_matches: int
) -> tuple[str, ...]:
    """Derive recommendations from the severities found and the content type."""
    recommendations: list[str] = []
    if counts.critical:
        recommendations.extend(_CRITICAL_RECOMMENDATIONS)
    if counts.high:
        recommendations.extend(_HIGH_RECOMMENDATIONS)
    if content_type in ("code", "config"):
        recommendations.extend(_SOURCE_RECOMMENDATIONS)
    if content_type == "log":
        recommendations.extend(_LOG_RECOMMENDATIONS)
    if total_matches:
        recommendations.append(_DPIA_RECOMMENDATION)
    return tuple(recommendations)


class PIIDetector:
    """Applies a pattern library to content and reports positioned matches.

    The detector holds no mutable state: the library is frozen and compiled
    regexes are cached process-wide, so one instance may serve concurrent
    callers. To swap reference data, build a new detector with a freshly
    loaded library.
    """

    def __init__(
        self,
        library: PIIPatternLibrary | None = None,
        config: EngineConfiguration | None = None,
    ) -> None:
        """Initialise the detector.

        Args:
            library: Pattern library; the bundled library when None
            config: Engine configuration; defaults when None

        """
        self._library = library or default_pii_library()
        self._config = config or EngineConfiguration()

    @property
    def library(self) -> PIIPatternLibrary:
        """The pattern library in use."""
        return self._library

    def detect(
        self, content: str, options: DetectOptions | None = None
    ) -> PIIDetectResult:
        """Scan content for PII.

        Args:
            content: Arbitrary text; empty content yields an empty result
            options: Detection options; defaults when None

        Returns:
            Matches ordered by start offset, severity counts, recommendations
            and, when requested, a redacted copy of the content

        Raises:
            ContentTooLargeError: If content exceeds the configured maximum
            KeyError: If options name a pattern type the library lacks

        """
        options = options or DetectOptions()
        limit = self._config.max_content_length
        if len(content) > limit:
            raise ContentTooLargeError(len(content), limit)

        matches: list[PIIMatch] = []
        for pattern in self._library.select(options.pattern_types):
            matches.extend(
                self._scan_pattern(content, pattern, options.include_line_numbers)
            )
        matches.sort(key=lambda m: (m.location.start, m.location.end))

        counts = SeverityCounts(
            critical=sum(1 for m in matches if m.severity == "critical"),
            high=sum(1 for m in matches if m.severity == "high"),
            medium=sum(1 for m in matches if m.severity == "medium"),
            low=sum(1 for m in matches if m.severity == "low"),
        )

        redacted_content = (
            apply_redactions(content, matches) if options.redact_matches else None
        )

        logger.debug(
            "PII scan of %d characters found %d matches", len(content), len(matches)
        )

        return PIIDetectResult(
            has_pii=bool(matches),
            content_type=options.content_type,
            total_matches=len(matches),
            matches_by_severity=counts,
            matches=tuple(matches),
            redacted_content=redacted_content,
            recommendations=build_recommendations(
                counts, options.content_type, len(matches)
            ),
        )

    def _scan_pattern(
        self, content: str, pattern: PIIPattern, include_line_numbers: bool
    ) -> list[PIIMatch]:
        window = self._config.allowlist_window
        found: list[PIIMatch] = []
        for match in pattern.compiled.finditer(content):
            start, end = match.span()
            value = match.group(0)
            if not value:
                continue

            context = content[max(0, start - window) : end + window]
            if self._library.is_allowlisted(context):
                logger.debug("Suppressed allowlisted %s match at %d", pattern.type, start)
                continue

            line = column = None
            if include_line_numbers:
                line, column = line_and_column(content, start)

            found.append(
                PIIMatch(
                    type=pattern.type,
                    description=pattern.description,
                    severity=pattern.severity,
                    value=value,
                    redacted_value=redact_value(value, pattern.redact_char),
                    location=MatchLocation(
                        start=start, end=end, line=line, column=column
                    ),
                )
            )
        return found
