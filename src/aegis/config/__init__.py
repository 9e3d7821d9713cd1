"""Engine configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

_ENVIRONMENT_VARIABLES: dict[str, str] = {
    "max_content_length": "AEGIS_MAX_CONTENT_LENGTH",
    "allowlist_window": "AEGIS_ALLOWLIST_WINDOW",
    "expiry_warning_days": "AEGIS_EXPIRY_WARNING_DAYS",
    "audit_trail_path": "AEGIS_AUDIT_TRAIL",
    "audit_trail_max_age_minutes": "AEGIS_AUDIT_TRAIL_MAX_AGE_MINUTES",
}


class EngineConfiguration(BaseModel):
    """Configuration shared by the analysis components.

    Features:
        - Pydantic validation for type safety
        - Immutable (frozen) so one instance can be shared across threads
        - from_properties() factory for dictionary-based creation
        - from_environment() factory reading ``AEGIS_*`` variables

    Example:
        ```python
        config = EngineConfiguration.from_properties({"allowlist_window": 30})
        detector = PIIDetector(config=config)
        ```

    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
    )

    max_content_length: int = Field(
        default=1_000_000,
        ge=1,
        description="Upper bound on content length accepted by regex-based detectors",
    )
    allowlist_window: int = Field(
        default=20,
        ge=0,
        le=500,
        description="Characters inspected on each side of a match for allowlist terms",
    )
    expiry_warning_days: int = Field(
        default=30,
        ge=0,
        description="Credentials expiring within this many days produce a warning",
    )
    audit_trail_path: Path | None = Field(
        default=None,
        description="Audit trail file checked for staleness by the commit gate",
    )
    audit_trail_max_age_minutes: int = Field(
        default=60,
        ge=1,
        description="Audit trail older than this produces a commit gate warning",
    )

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary with validation.

        Args:
            properties: Dictionary containing configuration properties

        Returns:
            Validated configuration instance

        Raises:
            ValidationError: If properties are invalid

        """
        return cls.model_validate(properties)

    @classmethod
    def from_environment(cls, overrides: dict[str, Any] | None = None) -> Self:
        """Create configuration from ``AEGIS_*`` environment variables.

        Explicit overrides take precedence over environment values.

        Args:
            overrides: Properties that replace environment-derived values

        Returns:
            Validated configuration instance

        """
        properties: dict[str, Any] = {}
        for field_name, variable in _ENVIRONMENT_VARIABLES.items():
            value = os.getenv(variable)
            if value:
                properties[field_name] = value
        if properties:
            logger.debug("Configuration read from environment: %s", sorted(properties))
        properties.update(overrides or {})
        return cls.from_properties(properties)
