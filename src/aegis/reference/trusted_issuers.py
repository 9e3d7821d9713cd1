"""Trusted credential issuers."""

from functools import cache
from typing import ClassVar

from pydantic import Field, field_validator

from aegis.reference.base import YAMLReferenceData


class TrustedIssuerRegistry(YAMLReferenceData):
    """Issuer id prefixes accepted as trusted by the credential validator."""

    reference_name: ClassVar[str] = "trusted_issuers"
    reference_version: ClassVar[str] = "1.0.0"

    prefixes: tuple[str, ...] = Field(min_length=1)

    @field_validator("prefixes")
    @classmethod
    def validate_prefixes(cls, prefixes: tuple[str, ...]) -> tuple[str, ...]:
        """Reject blank prefixes, which would trust every issuer."""
        if any(not prefix.strip() for prefix in prefixes):
            raise ValueError("Trusted issuer prefixes must not be blank")
        return prefixes

    def is_trusted(self, issuer_id: str) -> bool:
        """Check whether an issuer id starts with a trusted prefix."""
        return issuer_id.startswith(self.prefixes)


@cache
def default_trusted_issuers() -> TrustedIssuerRegistry:
    """Bundled trusted issuer list, loaded once per process."""
    return TrustedIssuerRegistry.load()
