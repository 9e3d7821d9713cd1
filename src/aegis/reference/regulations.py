"""Regulation catalog: frameworks, their requirements and the risk matrix.

The catalog is read-only reference data consumed by the compliance rule
engine. Framework ids are canonical lower-case identifiers (``gdpr``,
``aml``, ``eidas2``, ``eu-ai-act``); each framework may declare aliases
(``eidas``) that resolve to its canonical id.
"""

from functools import cache
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from aegis.reference.base import SEVERITY_ORDER, Severity, YAMLReferenceData
from aegis.reference.pii_patterns import PIIPatternLibrary


class Requirement(BaseModel):
    """A single regulatory requirement evaluated by the rule engine."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Requirement id (e.g., 'GDPR-001')")
    category: str = Field(min_length=1)
    requirement: str = Field(min_length=1, description="Short requirement text")
    description: str = Field(min_length=1)
    severity: Severity
    controls: tuple[str, ...] = ()


class RegulationFramework(BaseModel):
    """A regulatory framework and its requirements."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(pattern=r"^[a-z0-9][a-z0-9-]*$", description="Canonical id")
    name: str = Field(min_length=1)
    full_name: str = Field(min_length=1)
    jurisdiction: str = Field(min_length=1)
    effective_date: str = Field(min_length=1)
    aliases: tuple[str, ...] = ()
    requirements: tuple[Requirement, ...] = Field(min_length=1)

    @field_validator("aliases")
    @classmethod
    def normalise_aliases(cls, aliases: tuple[str, ...]) -> tuple[str, ...]:
        """Store aliases lower-cased."""
        return tuple(alias.lower() for alias in aliases)


class RiskBand(BaseModel):
    """Inclusive score range of one risk level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min: int = Field(ge=1, le=25)
    max: int = Field(ge=1, le=25)
    color: str

    @model_validator(mode="after")
    def validate_range(self) -> Self:
        """Ensure min does not exceed max."""
        if self.min > self.max:
            raise ValueError(f"Risk band min {self.min} exceeds max {self.max}")
        return self


class RiskMatrix(BaseModel):
    """Likelihood/impact scales and the risk level bands over their product."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    likelihood: dict[str, int]
    impact: dict[str, int]
    risk_levels: dict[Severity, RiskBand]

    @model_validator(mode="after")
    def validate_bands(self) -> Self:
        """Bands must tile 1..25 without gaps or overlaps."""
        bands = sorted(self.risk_levels.values(), key=lambda band: band.min)
        expected = 1
        for band in bands:
            if band.min != expected:
                raise ValueError(
                    f"Risk bands must be contiguous from 1; expected a band "
                    f"starting at {expected}, found {band.min}"
                )
            expected = band.max + 1
        if expected != 26:
            raise ValueError("Risk bands must end at 25")
        return self


class FrameworkSummary(BaseModel):
    """Per-framework block of the catalog summary."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    full_name: str
    jurisdiction: str
    effective_date: str
    requirement_count: int
    categories: tuple[str, ...]
    severity_counts: dict[str, int]


class CatalogSummary(BaseModel):
    """Overview of the regulation catalog for listing and dashboards."""

    model_config = ConfigDict(frozen=True)

    total_frameworks: int
    total_requirements: int
    jurisdictions: tuple[str, ...]
    frameworks: tuple[FrameworkSummary, ...]
    risk_matrix: RiskMatrix
    pii_pattern_count: int | None = None


class RegulationCatalog(YAMLReferenceData):
    """Static table of frameworks and requirements used by the rule engine."""

    reference_name: ClassVar[str] = "regulations"
    reference_version: ClassVar[str] = "1.0.0"

    frameworks: tuple[RegulationFramework, ...] = Field(min_length=1)
    risk_matrix: RiskMatrix

    @model_validator(mode="after")
    def validate_identifiers(self) -> Self:
        """Validate framework ids, aliases and requirement ids are unique."""
        seen: set[str] = set()
        for framework in self.frameworks:
            for key in (framework.id, *framework.aliases):
                if key in seen:
                    raise ValueError(f"Duplicate framework id or alias: '{key}'")
                seen.add(key)

        requirement_ids: set[str] = set()
        for framework in self.frameworks:
            for requirement in framework.requirements:
                if requirement.id in requirement_ids:
                    raise ValueError(f"Duplicate requirement id: '{requirement.id}'")
                requirement_ids.add(requirement.id)
        return self

    @property
    def framework_ids(self) -> tuple[str, ...]:
        """Canonical framework ids in catalog order."""
        return tuple(framework.id for framework in self.frameworks)

    def resolve(self, framework_id: str) -> str | None:
        """Resolve a framework id or alias to its canonical id.

        Matching is case-insensitive. Returns None for unknown ids.
        """
        key = framework_id.strip().lower()
        for framework in self.frameworks:
            if key == framework.id or key in framework.aliases:
                return framework.id
        return None

    def get(self, framework_id: str) -> RegulationFramework:
        """Get a framework by id or alias.

        Raises:
            KeyError: If the id matches no framework

        """
        canonical = self.resolve(framework_id)
        for framework in self.frameworks:
            if framework.id == canonical:
                return framework
        raise KeyError(framework_id)

    def find_requirement(self, requirement_id: str) -> Requirement | None:
        """Look up a requirement across all frameworks."""
        for framework in self.frameworks:
            for requirement in framework.requirements:
                if requirement.id == requirement_id:
                    return requirement
        return None


def catalog_summary(
    catalog: RegulationCatalog, pii_library: PIIPatternLibrary | None = None
) -> CatalogSummary:
    """Summarise the catalog: totals, jurisdictions and per-framework counts.

    Categories keep their first-seen order. Severity counts list only the
    severities that occur, most severe first.
    """
    framework_summaries: list[FrameworkSummary] = []
    for framework in catalog.frameworks:
        categories = tuple(dict.fromkeys(r.category for r in framework.requirements))
        counts = {
            severity: sum(1 for r in framework.requirements if r.severity == severity)
            for severity in SEVERITY_ORDER
        }
        framework_summaries.append(
            FrameworkSummary(
                id=framework.id,
                name=framework.name,
                full_name=framework.full_name,
                jurisdiction=framework.jurisdiction,
                effective_date=framework.effective_date,
                requirement_count=len(framework.requirements),
                categories=categories,
                severity_counts={k: v for k, v in counts.items() if v},
            )
        )

    return CatalogSummary(
        total_frameworks=len(framework_summaries),
        total_requirements=sum(s.requirement_count for s in framework_summaries),
        jurisdictions=tuple(dict.fromkeys(s.jurisdiction for s in framework_summaries)),
        frameworks=tuple(framework_summaries),
        risk_matrix=catalog.risk_matrix,
        pii_pattern_count=len(pii_library.patterns) if pii_library else None,
    )


@cache
def default_regulation_catalog() -> RegulationCatalog:
    """Bundled regulation catalog, loaded once per process."""
    return RegulationCatalog.load()
