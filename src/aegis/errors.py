"""Error classes for the Aegis compliance engine.

This module provides:
- AegisError: Base exception class for all engine errors
- ReferenceDataError, ReferenceDataNotFoundError: Reference data exceptions
- AnalysisError, AnalysisInputError: Analysis exceptions
- ContentTooLargeError: Raised when content exceeds the scan bound
- EmptyRiskFactorsError: Raised when a risk assessment has no factors
- HookError: Hook input exception

No-match results and ``needs_review`` findings are normal outcomes and are
never reported through these exceptions.
"""


class AegisError(Exception):
    """Base exception for all Aegis compliance engine errors."""

    pass


class ReferenceDataError(AegisError):
    """Raised when reference data (patterns, catalog, trust list) is invalid."""

    pass


class ReferenceDataNotFoundError(ReferenceDataError):
    """Raised when a reference data file cannot be found."""

    pass


class AnalysisError(AegisError):
    """Base exception for analysis-related errors."""

    pass


class AnalysisInputError(AnalysisError):
    """Raised when analysis input violates a precondition."""

    pass


class ContentTooLargeError(AnalysisInputError):
    """Raised when content is longer than the configured scan bound."""

    def __init__(self, length: int, limit: int) -> None:
        """Initialise with the offending length and the configured limit.

        Args:
            length: Length of the rejected content
            limit: Configured maximum content length

        """
        super().__init__(
            f"Content length {length} exceeds the maximum of {limit} characters"
        )
        self.length = length
        self.limit = limit


class EmptyRiskFactorsError(AnalysisInputError):
    """Raised when a risk assessment is requested without any factors."""

    pass


class HookError(AegisError):
    """Raised when hook input cannot be interpreted."""

    pass
