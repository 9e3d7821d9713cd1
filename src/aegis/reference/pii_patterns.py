"""Pattern library for PII and secret detection.

Each pattern is a named regex with a severity and a redaction character. The
library also carries an allowlist of benign contexts (documentation domains,
placeholder values) that suppress matches found near them.
"""

import re
from collections.abc import Iterable
from functools import cache
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aegis.reference.base import Severity, YAMLReferenceData


@cache
def compile_pattern(regex: str, case_insensitive: bool = False) -> re.Pattern[str]:
    """Compile and cache a detection regex.

    Args:
        regex: The regex source
        case_insensitive: Whether to compile with re.IGNORECASE

    Returns:
        Compiled regex pattern

    """
    return re.compile(regex, re.IGNORECASE if case_insensitive else 0)


def _validate_regex(regex: str) -> str:
    try:
        re.compile(regex)
    except re.error as e:
        raise ValueError(f"Invalid regex {regex!r}: {e}") from e
    return regex


class PIIPattern(BaseModel):
    """A named detector: regex, severity and redaction rule."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str = Field(min_length=1, description="Pattern identifier (e.g., 'ssn')")
    regex: str = Field(min_length=1, description="Regex matched against content")
    description: str = Field(min_length=1, description="Human-readable description")
    severity: Severity
    redact_char: str = Field(
        default="X",
        min_length=1,
        max_length=1,
        description="Character used to mask the interior of a matched value",
    )
    case_insensitive: bool = False

    @field_validator("regex")
    @classmethod
    def validate_regex(cls, regex: str) -> str:
        """Ensure the regex compiles."""
        return _validate_regex(regex)

    @property
    def compiled(self) -> re.Pattern[str]:
        """Compiled regex, shared across all callers."""
        return compile_pattern(self.regex, self.case_insensitive)


class PIIPatternLibrary(YAMLReferenceData):
    """Static table of PII detectors plus allowlisted contexts."""

    reference_name: ClassVar[str] = "pii_patterns"
    reference_version: ClassVar[str] = "1.0.0"

    patterns: tuple[PIIPattern, ...] = Field(min_length=1)
    allowlist: tuple[str, ...] = Field(
        default=(),
        description="Regexes (case-insensitive) marking a match's context as benign",
    )

    @field_validator("patterns")
    @classmethod
    def validate_unique_types(
        cls, patterns: tuple[PIIPattern, ...]
    ) -> tuple[PIIPattern, ...]:
        """Validate that pattern types are unique within the library."""
        types = [pattern.type for pattern in patterns]
        duplicates = sorted({t for t in types if types.count(t) > 1})
        if duplicates:
            raise ValueError(f"Duplicate pattern types found: {duplicates}")
        return patterns

    @field_validator("allowlist")
    @classmethod
    def validate_allowlist(cls, allowlist: tuple[str, ...]) -> tuple[str, ...]:
        """Ensure every allowlist entry compiles."""
        for entry in allowlist:
            _validate_regex(entry)
        return allowlist

    @property
    def types(self) -> tuple[str, ...]:
        """Pattern types in library order."""
        return tuple(pattern.type for pattern in self.patterns)

    def get(self, pattern_type: str) -> PIIPattern:
        """Get a pattern by type.

        Raises:
            KeyError: If no pattern has this type

        """
        for pattern in self.patterns:
            if pattern.type == pattern_type:
                return pattern
        raise KeyError(pattern_type)

    def select(self, pattern_types: Iterable[str] | None) -> tuple[PIIPattern, ...]:
        """Get the patterns for the given types, in library order.

        Args:
            pattern_types: Types to keep, or None for every pattern

        Raises:
            KeyError: If a requested type is not in the library

        """
        if pattern_types is None:
            return self.patterns
        wanted = set(pattern_types)
        unknown = wanted - set(self.types)
        if unknown:
            raise KeyError(f"Unknown pattern types: {sorted(unknown)}")
        return tuple(p for p in self.patterns if p.type in wanted)

    def is_allowlisted(self, context: str) -> bool:
        """Check whether a context window contains an allowlisted term."""
        return any(
            compile_pattern(entry, True).search(context) for entry in self.allowlist
        )


class SecretPatternLibrary(PIIPatternLibrary):
    """Credentials and key material that must never reach version control."""

    reference_name: ClassVar[str] = "secret_patterns"
    reference_version: ClassVar[str] = "1.0.0"


@cache
def default_pii_library() -> PIIPatternLibrary:
    """Bundled PII pattern library, loaded once per process."""
    return PIIPatternLibrary.load()


@cache
def default_secret_library() -> SecretPatternLibrary:
    """Bundled secret pattern library, loaded once per process."""
    return SecretPatternLibrary.load()
