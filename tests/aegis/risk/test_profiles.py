"""Tests for the sample risk profiles."""

import pytest

from aegis.risk import RiskFactor, RiskScorer, default_risk_profiles


class TestRiskProfileLibrary:
    """Test cases for RiskProfileLibrary.factors_for."""

    def test_every_entity_type_has_a_profile(self) -> None:
        profiles = default_risk_profiles().profiles

        assert set(profiles) == {"customer", "transaction", "process", "system", "vendor"}

    def test_jurisdiction_specific_factor_included_for_eu(self) -> None:
        factors = default_risk_profiles().factors_for("customer", "eu")

        assert "Cross-Border Data Transfer" in [f.name for f in factors]
        assert len(factors) == 4

    def test_jurisdiction_specific_factor_excluded_elsewhere(self) -> None:
        factors = default_risk_profiles().factors_for("customer", "US")

        assert "Cross-Border Data Transfer" not in [f.name for f in factors]
        assert len(factors) == 3

    def test_factors_are_plain_risk_factors(self) -> None:
        factors = default_risk_profiles().factors_for("transaction")

        assert all(type(f) is RiskFactor for f in factors)

    @pytest.mark.parametrize(
        "entity_type", ["customer", "transaction", "process", "system", "vendor"]
    )
    def test_profiles_can_be_scored(self, entity_type: str) -> None:
        factors = default_risk_profiles().factors_for(entity_type, "EU")  # type: ignore[arg-type]

        result = RiskScorer().score(entity_type, "sample", factors)  # type: ignore[arg-type]

        assert 1 <= result.overall_score <= 25
