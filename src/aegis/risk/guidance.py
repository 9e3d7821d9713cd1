"""Recommendations and regulatory implications for risk assessments.

Both are deterministic lookups over the scored factors, the entity type,
the overall risk level and the jurisdiction.
"""

from collections.abc import Sequence

from aegis.risk.types import EntityType, RiskLevel, ScoredFactor

RECOMMENDATION_THRESHOLD = 10
MANUAL_REVIEW_THRESHOLD = 15

_CATEGORY_TEMPLATES: dict[str, str] = {
    "compliance": "Conduct detailed compliance review and implement controls",
    "operational": "Review operational procedures and add monitoring",
    "financial": "Implement financial controls and transaction limits",
    "reputational": "Prepare communication plan and stakeholder management",
}
_DEFAULT_TEMPLATE = "Implement risk mitigation measures"


def factor_recommendation(factor: ScoredFactor) -> str:
    """Recommendation for one high-scoring factor.

    Uses the factor's first mitigation when it has one, otherwise the
    template for its category.
    """
    if factor.mitigations:
        action = factor.mitigations[0]
    else:
        action = _CATEGORY_TEMPLATES.get(factor.category.lower(), _DEFAULT_TEMPLATE)
    return f"[{factor.category.upper()}] {factor.name}: {action}"


def build_recommendations(
    factors: Sequence[ScoredFactor], entity_type: EntityType
) -> tuple[str, ...]:
    """Recommendations for factors scoring 10 or more, plus entity rules."""
    recommendations = [
        factor_recommendation(factor)
        for factor in factors
        if factor.score >= RECOMMENDATION_THRESHOLD
    ]

    if entity_type == "customer" and any(
        f.category.lower() == "compliance" and f.score >= RECOMMENDATION_THRESHOLD
        for f in factors
    ):
        recommendations.append(
            "Apply Enhanced Due Diligence (EDD) procedures for this customer"
        )
    if entity_type == "transaction" and any(
        f.score >= MANUAL_REVIEW_THRESHOLD for f in factors
    ):
        recommendations.append("Flag transaction for manual review before processing")

    return tuple(recommendations)


def regulatory_implications(
    risk_level: RiskLevel, entity_type: EntityType, jurisdiction: str | None = None
) -> tuple[str, ...]:
    """Canned regulatory consequences of a risk level.

    The eIDAS line applies to EU entities and to entities without a stated
    jurisdiction.
    """
    if risk_level in ("high", "critical"):
        implications = [
            "AML: Enhanced monitoring and potential SAR filing required",
            "GDPR: Data Protection Impact Assessment may be required",
        ]
        if entity_type == "customer":
            implications.append("AML: Customer risk rating must be elevated")
            implications.append("KYC: Additional verification documentation required")
        if not jurisdiction or jurisdiction.strip().upper() == "EU":
            implications.append("eIDAS: High-assurance identity verification required")
        return tuple(implications)

    if risk_level == "medium":
        return (
            "Standard monitoring procedures apply",
            "Periodic review cycle: Quarterly",
        )
    return (
        "Standard compliance procedures sufficient",
        "Periodic review cycle: Annual",
    )
