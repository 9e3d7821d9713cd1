"""Types for entity risk assessment.

These models mirror the camelCase shape exchanged with callers: fields are
populated by either name or alias and dumped with ``by_alias=True``.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from aegis.reference.base import Severity

EntityType = Literal["customer", "transaction", "process", "system", "vendor"]
RiskLevel = Severity

_CAMEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    validate_by_name=True,
    validate_by_alias=True,
)


class RiskFactor(BaseModel):
    """A caller-supplied risk factor."""

    model_config = _CAMEL_CONFIG

    name: str = Field(min_length=1)
    category: str = Field(
        min_length=1,
        description="e.g. compliance, operational, financial, reputational",
    )
    likelihood: int = Field(ge=1, le=5, description="1 = rare, 5 = almost certain")
    impact: int = Field(ge=1, le=5, description="1 = negligible, 5 = severe")
    description: str | None = None
    mitigations: tuple[str, ...] = ()


class ScoredFactor(RiskFactor):
    """A risk factor with its score (likelihood x impact) and risk level."""

    score: int = Field(ge=1, le=25)
    level: RiskLevel


class RiskContext(BaseModel):
    """Optional context that adjusts an assessment."""

    model_config = _CAMEL_CONFIG

    jurisdiction: str | None = None
    industry: str | None = None
    previous_incidents: int = Field(default=0, ge=0)


class CategoryAggregate(BaseModel):
    """Rollup of the factors sharing a category."""

    model_config = _CAMEL_CONFIG

    avg_score: float
    level: RiskLevel
    factor_names: tuple[str, ...]


class RiskAssessmentResult(BaseModel):
    """Scored assessment of one entity."""

    model_config = _CAMEL_CONFIG

    entity_type: EntityType
    entity_id: str
    overall_score: int = Field(ge=1, le=25)
    risk_level: RiskLevel
    factors: tuple[ScoredFactor, ...]
    aggregated_by_category: dict[str, CategoryAggregate]
    recommendations: tuple[str, ...]
    regulatory_implications: tuple[str, ...]
