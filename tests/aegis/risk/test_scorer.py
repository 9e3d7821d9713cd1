"""Tests for risk scoring, banding and guidance."""

import pytest
from pydantic import ValidationError

from aegis.errors import EmptyRiskFactorsError
from aegis.risk import (
    RiskContext,
    RiskFactor,
    RiskScorer,
    aggregate_by_category,
    build_recommendations,
    classify_risk_level,
    regulatory_implications,
    round_half_up,
    score_factor,
)


def _factor(
    name: str,
    likelihood: int,
    impact: int,
    category: str = "compliance",
    mitigations: tuple[str, ...] = (),
) -> RiskFactor:
    return RiskFactor(
        name=name,
        category=category,
        likelihood=likelihood,
        impact=impact,
        mitigations=mitigations,
    )


@pytest.fixture
def scorer() -> RiskScorer:
    """A risk scorer."""
    return RiskScorer()


# =============================================================================
# Banding
# =============================================================================


class TestClassifyRiskLevel:
    """Test cases for the risk level bands."""

    @pytest.mark.parametrize(
        ("score", "level"),
        [
            (1, "low"),
            (4, "low"),
            (5, "medium"),
            (9, "medium"),
            (10, "high"),
            (16, "high"),
            (17, "critical"),
            (25, "critical"),
        ],
    )
    def test_band_boundaries(self, score: int, level: str) -> None:
        assert classify_risk_level(score) == level

    @pytest.mark.parametrize(
        ("likelihood", "impact", "level"),
        [(2, 2, "low"), (3, 3, "medium"), (3, 4, "high"), (4, 5, "critical")],
    )
    def test_factor_levels(self, likelihood: int, impact: int, level: str) -> None:
        scored = score_factor(_factor("f", likelihood, impact))

        assert scored.score == likelihood * impact
        assert scored.level == level


class TestRoundHalfUp:
    """Test cases for round_half_up."""

    @pytest.mark.parametrize(
        ("value", "digits", "expected"),
        [(12.5, 0, 13.0), (12.4, 0, 12.0), (2.5, 0, 3.0), (7.25, 1, 7.3), (5.0, 1, 5.0)],
    )
    def test_rounding(self, value: float, digits: int, expected: float) -> None:
        assert round_half_up(value, digits) == pytest.approx(expected)


class TestRiskFactorValidation:
    """Test cases for RiskFactor bounds."""

    @pytest.mark.parametrize(("likelihood", "impact"), [(0, 3), (6, 3), (3, 0), (3, 6)])
    def test_out_of_range_values_rejected(self, likelihood: int, impact: int) -> None:
        with pytest.raises(ValidationError):
            _factor("f", likelihood, impact)

    def test_context_accepts_camel_case_keys(self) -> None:
        context = RiskContext.model_validate(
            {"jurisdiction": "EU", "previousIncidents": 2}
        )

        assert context.previous_incidents == 2
        assert context.model_dump(by_alias=True)["previousIncidents"] == 2


# =============================================================================
# Scoring
# =============================================================================


class TestRiskScorer:
    """Test cases for RiskScorer.score."""

    def test_overall_weights_mean_and_maximum(self, scorer: RiskScorer) -> None:
        # scores 12 and 4: mean 8 * 0.6 + 12 * 0.4 = 9.6 -> 10
        result = scorer.score(
            "customer", "C-1", [_factor("a", 3, 4), _factor("b", 2, 2)]
        )

        assert result.overall_score == 10
        assert result.risk_level == "high"

    def test_single_factor_score_is_its_product(self, scorer: RiskScorer) -> None:
        result = scorer.score("system", "S-1", [_factor("a", 3, 3)])

        assert result.overall_score == 9
        assert result.risk_level == "medium"

    def test_previous_incidents_add_penalty(self, scorer: RiskScorer) -> None:
        result = scorer.score(
            "vendor",
            "V-1",
            [_factor("a", 2, 2)],
            RiskContext(previous_incidents=3),
        )

        assert result.overall_score == 10

    def test_incident_penalty_is_capped(self, scorer: RiskScorer) -> None:
        result = scorer.score(
            "customer",
            "C-2",
            [_factor("a", 4, 5)],
            RiskContext(previous_incidents=10),
        )

        assert result.overall_score == 25
        assert result.risk_level == "critical"

    def test_empty_factors_raise(self, scorer: RiskScorer) -> None:
        with pytest.raises(EmptyRiskFactorsError, match="C-3"):
            scorer.score("customer", "C-3", [])

    def test_factors_keep_input_order(self, scorer: RiskScorer) -> None:
        result = scorer.score(
            "process", "P-1", [_factor("b", 1, 1), _factor("a", 5, 5)]
        )

        assert [f.name for f in result.factors] == ["b", "a"]

    def test_is_deterministic(self, scorer: RiskScorer) -> None:
        factors = [_factor("a", 3, 4), _factor("b", 2, 5, "financial")]

        assert scorer.score("customer", "C", factors) == scorer.score(
            "customer", "C", factors
        )


class TestCategoryAggregation:
    """Test cases for aggregate_by_category."""

    def test_average_is_rounded_to_one_decimal(self) -> None:
        scored = [
            score_factor(_factor("a", 3, 4)),
            score_factor(_factor("b", 2, 2)),
            score_factor(_factor("c", 1, 1)),
        ]

        aggregates = aggregate_by_category(scored)

        # (12 + 4 + 1) / 3 = 5.666...
        assert aggregates["compliance"].avg_score == pytest.approx(5.7)
        assert aggregates["compliance"].level == "medium"
        assert aggregates["compliance"].factor_names == ("a", "b", "c")

    def test_categories_in_first_seen_order(self) -> None:
        scored = [
            score_factor(_factor("a", 1, 1, "operational")),
            score_factor(_factor("b", 1, 1, "financial")),
            score_factor(_factor("c", 1, 1, "operational")),
        ]

        assert list(aggregate_by_category(scored)) == ["operational", "financial"]


# =============================================================================
# Guidance
# =============================================================================


class TestRecommendations:
    """Test cases for risk recommendations."""

    def test_low_scoring_factors_give_no_recommendations(self) -> None:
        scored = [score_factor(_factor("a", 3, 3))]

        assert build_recommendations(scored, "system") == ()

    def test_first_mitigation_is_used(self) -> None:
        scored = [
            score_factor(
                _factor("Geo", 3, 4, "financial", ("Verify funds", "Monitor"))
            )
        ]

        assert build_recommendations(scored, "vendor") == (
            "[FINANCIAL] Geo: Verify funds",
        )

    def test_category_template_without_mitigations(self) -> None:
        scored = [score_factor(_factor("Ops", 4, 4, "operational"))]

        assert build_recommendations(scored, "system") == (
            "[OPERATIONAL] Ops: Review operational procedures and add monitoring",
        )

    def test_customer_compliance_risk_triggers_edd(self) -> None:
        scored = [score_factor(_factor("KYC", 3, 4))]

        recommendations = build_recommendations(scored, "customer")

        assert recommendations[-1].startswith("Apply Enhanced Due Diligence")

    def test_transaction_manual_review_from_fifteen(self) -> None:
        below = [score_factor(_factor("Amount", 3, 4, "financial"))]
        at = [score_factor(_factor("Amount", 3, 5, "financial"))]

        assert not any(
            "manual review" in r for r in build_recommendations(below, "transaction")
        )
        assert build_recommendations(at, "transaction")[-1] == (
            "Flag transaction for manual review before processing"
        )


class TestRegulatoryImplications:
    """Test cases for regulatory_implications."""

    def test_low_risk(self) -> None:
        assert regulatory_implications("low", "system") == (
            "Standard compliance procedures sufficient",
            "Periodic review cycle: Annual",
        )

    def test_medium_risk(self) -> None:
        assert regulatory_implications("medium", "customer")[1] == (
            "Periodic review cycle: Quarterly"
        )

    def test_high_risk_customer_in_eu(self) -> None:
        implications = regulatory_implications("high", "customer", "eu")

        assert len(implications) == 5
        assert implications[-1].startswith("eIDAS:")

    def test_high_risk_outside_eu_has_no_eidas_line(self) -> None:
        implications = regulatory_implications("critical", "transaction", "US")

        assert len(implications) == 2
        assert not any(i.startswith("eIDAS:") for i in implications)

    def test_missing_jurisdiction_includes_eidas(self) -> None:
        implications = regulatory_implications("high", "vendor")

        assert implications[-1].startswith("eIDAS:")
