"""Sample risk factor profiles per entity type."""

from functools import cache
from typing import ClassVar

from pydantic import Field

from aegis.reference.base import YAMLReferenceData
from aegis.risk.types import EntityType, RiskFactor


class ProfileFactor(RiskFactor):
    """A sample factor, optionally restricted to some jurisdictions."""

    jurisdictions: tuple[str, ...] = ()


class RiskProfileLibrary(YAMLReferenceData):
    """Representative factors for assessments run without caller factors."""

    reference_name: ClassVar[str] = "risk_profiles"
    reference_version: ClassVar[str] = "1.0.0"

    profiles: dict[EntityType, tuple[ProfileFactor, ...]] = Field(min_length=1)

    def factors_for(
        self, entity_type: EntityType, jurisdiction: str | None = None
    ) -> tuple[RiskFactor, ...]:
        """Sample factors for an entity type in a jurisdiction.

        Jurisdiction-restricted factors are only included when the
        jurisdiction matches (case-insensitively).

        Raises:
            KeyError: If no profile exists for the entity type

        """
        profile = self.profiles[entity_type]
        wanted = (jurisdiction or "").strip().upper()
        return tuple(
            RiskFactor.model_validate(
                factor.model_dump(include=set(RiskFactor.model_fields))
            )
            for factor in profile
            if not factor.jurisdictions
            or wanted in (j.upper() for j in factor.jurisdictions)
        )


@cache
def default_risk_profiles() -> RiskProfileLibrary:
    """Bundled risk profiles, loaded once per process."""
    return RiskProfileLibrary.load()
