"""Tests for the request/response interface layer."""

from datetime import UTC, datetime
from typing import Any

import pytest
from pydantic import ValidationError

from aegis.compliance import Finding
from aegis.errors import AnalysisInputError
from aegis.interfaces import (
    ComplianceCheckRequest,
    CredentialVerifyRequest,
    PIIScanRequest,
    RiskAssessmentRequest,
    assess_risk,
    check_compliance,
    framework_score,
    redact_pii,
    scan_pii,
    scan_recommendations,
    verify_credential,
)
from aegis.interfaces.compliance import score_risk_level

# =============================================================================
# PII
# =============================================================================


class TestScanPII:
    """Test cases for scan_pii."""

    def test_groups_findings_by_type(self) -> None:
        response = scan_pii(
            PIIScanRequest(
                content="SSN 123-45-6789, SSN 987-65-4321, mail bob@corp.org"
            )
        )

        assert response.pii_detected is True
        assert response.risk_level == "high"
        by_type = {f.type: f for f in response.rule_based.findings}
        assert by_type["ssn"].count == 2
        assert by_type["ssn"].risk == "high"
        assert by_type["email"].risk == "medium"
        assert response.rule_based.total_items == 3

    def test_samples_are_masked_and_limited(self) -> None:
        content = " ".join(f"SSN 12{i}-45-678{i}" for i in range(5))

        response = scan_pii(PIIScanRequest(content=content))
        ssn = response.rule_based.findings[0]

        assert ssn.count == 5
        assert len(ssn.samples) == 3
        assert all("X" in sample for sample in ssn.samples)

    def test_clean_content(self) -> None:
        response = scan_pii(PIIScanRequest(content="nothing to see"))

        assert response.pii_detected is False
        assert response.risk_level == "low"
        assert response.recommendations == ("No PII detected - content appears safe",)

    def test_empty_content_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PIIScanRequest(content="")

    def test_unknown_context_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PIIScanRequest(content="x", context="email")  # type: ignore[arg-type]


class TestScanRecommendations:
    """Test cases for scan_recommendations."""

    def test_email_advice_depends_on_context(self) -> None:
        code = scan_pii(PIIScanRequest(content="bob@corp.org", context="code"))
        message = scan_pii(PIIScanRequest(content="bob@corp.org", context="message"))

        assert "placeholder emails" in code.recommendations[0]
        assert "GDPR minimization" in message.recommendations[0]

    def test_ci_advice_is_always_last(self) -> None:
        response = scan_pii(PIIScanRequest(content="SSN 123-45-6789"))

        assert response.recommendations[-1].startswith("Run PII scan in CI/CD")

    def test_no_findings(self) -> None:
        assert scan_recommendations((), "code") == (
            "No PII detected - content appears safe",
        )


class TestRedactPII:
    """Test cases for redact_pii."""

    def test_replaces_values_with_placeholders(self) -> None:
        response = redact_pii(PIIScanRequest(content="SSN: 123-45-6789"))

        assert response.redacted_content == "SSN: [REDACTED_SSN]"
        assert response.total_redacted == 1
        assert response.redactions[0].type == "ssn"
        assert response.original_length == 16
        assert response.redacted_length == len("SSN: [REDACTED_SSN]")

    def test_nested_password_and_phone_redact_once(self) -> None:
        response = redact_pii(
            PIIScanRequest(content="password=Hunter2.555-123-4567 end")
        )

        assert response.redacted_content == "[REDACTED_PASSWORD] end"
        assert response.total_redacted == 1
        assert [(r.type, r.count) for r in response.redactions] == [("password", 1)]

    def test_nothing_to_redact(self) -> None:
        response = redact_pii(PIIScanRequest(content="plain words"))

        assert response.redacted_content == "plain words"
        assert response.redactions == ()


# =============================================================================
# Compliance
# =============================================================================


def _finding(status: str, severity: str) -> Finding:
    return Finding.model_validate(
        {
            "id": "X-1",
            "framework_id": "gdpr",
            "framework": "GDPR",
            "requirement": "r",
            "severity": severity,
            "status": status,
            "details": "d",
        }
    )


class TestComplianceScoring:
    """Test cases for the percentage score."""

    def test_all_compliant_scores_hundred(self) -> None:
        assert framework_score([_finding("compliant", "critical")]) == 100

    def test_weights(self) -> None:
        findings = [
            _finding("non_compliant", "critical"),
            _finding("needs_review", "high"),
            _finding("needs_review", "medium"),
        ]

        # 100 - 25 - 3 - 2
        assert framework_score(findings) == 70

    def test_score_floors_at_zero(self) -> None:
        findings = [_finding("non_compliant", "critical")] * 5

        assert framework_score(findings) == 0

    @pytest.mark.parametrize(
        ("score", "level"), [(79, "high"), (80, "medium"), (89, "medium"), (90, "low")]
    )
    def test_score_risk_level(self, score: int, level: str) -> None:
        assert score_risk_level(score) == level


class TestCheckCompliance:
    """Test cases for check_compliance."""

    def test_results_per_framework(self) -> None:
        response = check_compliance(
            ComplianceCheckRequest(
                target="onboarding.py",
                target_type="file",
                frameworks=("gdpr", "aml"),
                content="def onboard(user): store(personal_data)",
            )
        )

        assert response.frameworks == ("gdpr", "aml")
        assert set(response.results) == {"gdpr", "aml"}
        assert response.results["gdpr"].status == "non_compliant"
        assert response.overall_status == "non_compliant"
        assert response.results["gdpr"].score == 49
        assert response.results["aml"].score == 87
        assert response.score == 68
        assert response.risk_level == "high"

    def test_aliases_resolve(self) -> None:
        response = check_compliance(
            ComplianceCheckRequest(
                target="wallet", target_type="process", frameworks=("eidas",)
            )
        )

        assert response.frameworks == ("eidas2",)

    def test_unknown_frameworks_raise(self) -> None:
        with pytest.raises(AnalysisInputError, match="hipaa"):
            check_compliance(
                ComplianceCheckRequest(
                    target="x", target_type="file", frameworks=("hipaa",)
                )
            )

    def test_frameworks_required(self) -> None:
        with pytest.raises(ValidationError):
            ComplianceCheckRequest(target="x", target_type="file", frameworks=())


# =============================================================================
# Risk and credentials
# =============================================================================


class TestAssessRisk:
    """Test cases for assess_risk."""

    def test_camel_case_request(self) -> None:
        request = RiskAssessmentRequest.model_validate(
            {
                "entityType": "transaction",
                "entityId": "TX-42",
                "factors": [
                    {
                        "name": "Amount",
                        "category": "financial",
                        "likelihood": 3,
                        "impact": 5,
                    }
                ],
                "context": {"jurisdiction": "US", "previousIncidents": 1},
            }
        )

        result = assess_risk(request)
        dumped = result.model_dump(by_alias=True)

        assert result.overall_score == 17
        assert dumped["entityId"] == "TX-42"
        assert dumped["riskLevel"] == "critical"
        assert "Flag transaction for manual review before processing" in (
            result.recommendations
        )

    def test_factors_required(self) -> None:
        with pytest.raises(ValidationError):
            RiskAssessmentRequest.model_validate(
                {"entityType": "customer", "entityId": "C-1", "factors": []}
            )


class TestVerifyCredential:
    """Test cases for verify_credential."""

    def test_verify_with_options(self) -> None:
        credential: dict[str, Any] = {
            "@context": ["https://www.w3.org/2018/credentials/v1"],
            "type": ["VerifiableCredential"],
            "issuer": "did:key:z6Mkissuer",
            "issuanceDate": "2024-01-01T00:00:00Z",
            "credentialSubject": {"id": "did:key:z6Mksubject"},
        }
        request = CredentialVerifyRequest.model_validate(
            {"credential": credential, "options": {"verifySignature": False}}
        )

        result = verify_credential(request, now=datetime(2025, 1, 1, tzinfo=UTC))

        assert result.is_valid is True
        assert result.credential_id == "did:key:z6Mksubject"
        assert not any(c.name == "Proof" for c in result.checks)
