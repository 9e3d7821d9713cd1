"""Entity risk scoring."""

from aegis.risk.guidance import (
    build_recommendations,
    factor_recommendation,
    regulatory_implications,
)
from aegis.risk.profiles import (
    ProfileFactor,
    RiskProfileLibrary,
    default_risk_profiles,
)
from aegis.risk.scorer import (
    RiskScorer,
    aggregate_by_category,
    classify_risk_level,
    round_half_up,
    score_factor,
)
from aegis.risk.types import (
    CategoryAggregate,
    EntityType,
    RiskAssessmentResult,
    RiskContext,
    RiskFactor,
    RiskLevel,
    ScoredFactor,
)

__all__ = [
    "CategoryAggregate",
    "EntityType",
    "ProfileFactor",
    "RiskAssessmentResult",
    "RiskContext",
    "RiskFactor",
    "RiskLevel",
    "RiskProfileLibrary",
    "RiskScorer",
    "ScoredFactor",
    "aggregate_by_category",
    "build_recommendations",
    "classify_risk_level",
    "default_risk_profiles",
    "factor_recommendation",
    "regulatory_implications",
    "round_half_up",
    "score_factor",
]
