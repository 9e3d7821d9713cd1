"""Risk assessment request shape."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from aegis.risk.scorer import RiskScorer
from aegis.risk.types import EntityType, RiskAssessmentResult, RiskContext, RiskFactor


class RiskAssessmentRequest(BaseModel):
    """An entity and the factors to score it by."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        validate_by_name=True,
        validate_by_alias=True,
    )

    entity_type: EntityType
    entity_id: str = Field(min_length=1)
    factors: tuple[RiskFactor, ...] = Field(min_length=1)
    context: RiskContext | None = None


def assess_risk(
    request: RiskAssessmentRequest, scorer: RiskScorer | None = None
) -> RiskAssessmentResult:
    """Score the requested entity."""
    scorer = scorer or RiskScorer()
    return scorer.score(
        request.entity_type, request.entity_id, request.factors, request.context
    )
