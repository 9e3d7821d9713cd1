"""Entity risk scoring."""

import logging
import math
from collections.abc import Sequence

from aegis.errors import EmptyRiskFactorsError
from aegis.risk.guidance import build_recommendations, regulatory_implications
from aegis.risk.types import (
    CategoryAggregate,
    EntityType,
    RiskAssessmentResult,
    RiskContext,
    RiskFactor,
    RiskLevel,
    ScoredFactor,
)

logger = logging.getLogger(__name__)

MAX_SCORE = 25
AVERAGE_WEIGHT = 0.6
MAXIMUM_WEIGHT = 0.4
INCIDENT_PENALTY = 2


def classify_risk_level(score: float) -> RiskLevel:
    """Map a score to its risk level.

    The single banding function used for factors, categories and overall
    scores: ``<= 4`` low, ``<= 9`` medium, ``<= 16`` high, otherwise critical.
    """
    if score <= 4:
        return "low"
    if score <= 9:
        return "medium"
    if score <= 16:
        return "high"
    return "critical"


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (12.5 -> 13), unlike the built-in round."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def score_factor(factor: RiskFactor) -> ScoredFactor:
    """Score one factor as likelihood x impact."""
    score = factor.likelihood * factor.impact
    return ScoredFactor(
        **factor.model_dump(include=set(RiskFactor.model_fields)),
        score=score,
        level=classify_risk_level(score),
    )


def aggregate_by_category(
    factors: Sequence[ScoredFactor],
) -> dict[str, CategoryAggregate]:
    """Average factor scores per category, in first-seen category order.

    The level is classified from the unrounded mean; the reported average is
    rounded to one decimal.
    """
    grouped: dict[str, list[ScoredFactor]] = {}
    for factor in factors:
        grouped.setdefault(factor.category, []).append(factor)

    aggregates: dict[str, CategoryAggregate] = {}
    for category, members in grouped.items():
        mean = sum(f.score for f in members) / len(members)
        aggregates[category] = CategoryAggregate(
            avg_score=round_half_up(mean, 1),
            level=classify_risk_level(mean),
            factor_names=tuple(f.name for f in members),
        )
    return aggregates


class RiskScorer:
    """Scores entities from caller-supplied risk factors.

    Stateless; factors are not retained between calls.
    """

    def score(
        self,
        entity_type: EntityType,
        entity_id: str,
        factors: Sequence[RiskFactor],
        context: RiskContext | None = None,
    ) -> RiskAssessmentResult:
        """Assess an entity.

        The overall score weights the mean factor score by 0.6 and the
        maximum by 0.4, rounded half-up. Each previous incident adds 2,
        capped at 25.

        Args:
            entity_type: Kind of entity assessed
            entity_id: Caller's identifier for the entity
            factors: At least one risk factor
            context: Optional jurisdiction and incident history

        Returns:
            The scored assessment

        Raises:
            EmptyRiskFactorsError: If no factors are given

        """
        if not factors:
            raise EmptyRiskFactorsError(
                f"Risk assessment of {entity_type} '{entity_id}' requires at "
                "least one risk factor"
            )
        context = context or RiskContext()

        scored = [score_factor(factor) for factor in factors]
        scores = [factor.score for factor in scored]
        mean = sum(scores) / len(scores)
        overall = int(
            round_half_up(mean * AVERAGE_WEIGHT + max(scores) * MAXIMUM_WEIGHT)
        )
        if context.previous_incidents > 0:
            overall = min(
                MAX_SCORE, overall + context.previous_incidents * INCIDENT_PENALTY
            )

        risk_level = classify_risk_level(overall)
        logger.debug(
            "Scored %s '%s': overall %d (%s) from %d factors",
            entity_type,
            entity_id,
            overall,
            risk_level,
            len(scored),
        )

        return RiskAssessmentResult(
            entity_type=entity_type,
            entity_id=entity_id,
            overall_score=overall,
            risk_level=risk_level,
            factors=tuple(scored),
            aggregated_by_category=aggregate_by_category(scored),
            recommendations=build_recommendations(scored, entity_type),
            regulatory_implications=regulatory_implications(
                risk_level, entity_type, context.jurisdiction
            ),
        )
