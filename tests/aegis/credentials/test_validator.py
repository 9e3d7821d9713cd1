"""Tests for the verifiable credential validator."""

from datetime import UTC, datetime
from typing import Any

import pytest

from aegis.config import EngineConfiguration
from aegis.credentials import (
    SIMULATED_SIGNATURE_DETAILS,
    CredentialValidator,
    ValidationOptions,
    ValidationResult,
    VerifiableCredential,
    parse_timestamp,
)


def _validate(
    data: dict[str, Any],
    now: datetime,
    options: ValidationOptions | None = None,
    validator: CredentialValidator | None = None,
) -> ValidationResult:
    validator = validator or CredentialValidator()
    return validator.validate(VerifiableCredential.model_validate(data), options, now)


def _check(result: ValidationResult, name: str) -> bool:
    return next(c.passed for c in result.checks if c.name == name)


# =============================================================================
# Parsing
# =============================================================================


class TestCredentialParsing:
    """Test cases for VerifiableCredential parsing."""

    def test_issuer_object_and_subject_id(self, credential_data: dict[str, Any]) -> None:
        credential = VerifiableCredential.model_validate(credential_data)

        assert credential.issuer_id == "did:web:government.eu"
        assert credential.subject_id == "did:key:z6MkholderKey"
        assert credential.proof is not None
        assert credential.proof.verification_method == "did:web:government.eu#key-1"

    def test_single_string_type_and_context(
        self, credential_data: dict[str, Any]
    ) -> None:
        credential_data["type"] = "VerifiableCredential"
        credential_data["@context"] = "https://www.w3.org/2018/credentials/v1"

        credential = VerifiableCredential.model_validate(credential_data)

        assert credential.type == ("VerifiableCredential",)
        assert credential.context == ("https://www.w3.org/2018/credentials/v1",)

    def test_extra_fields_round_trip(self, credential_data: dict[str, Any]) -> None:
        credential_data["credentialStatus"] = {"id": "https://status.example/1"}

        credential = VerifiableCredential.model_validate(credential_data)
        dumped = credential.model_dump(by_alias=True, exclude_none=True)

        assert dumped["credentialStatus"] == {"id": "https://status.example/1"}
        assert dumped["@context"] == tuple(credential_data["@context"])
        assert VerifiableCredential.model_validate(dumped) == credential

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2025-01-15T09:00:00Z", datetime(2025, 1, 15, 9, tzinfo=UTC)),
            ("2025-01-15", datetime(2025, 1, 15, tzinfo=UTC)),
            ("not a date", None),
        ],
    )
    def test_parse_timestamp(self, value: str, expected: datetime | None) -> None:
        assert parse_timestamp(value) == expected


# =============================================================================
# Validation
# =============================================================================


class TestCredentialValidator:
    """Test cases for CredentialValidator.validate."""

    def test_well_formed_credential_is_valid(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        result = _validate(credential_data, now)

        assert result.is_valid is True
        assert result.errors == ()
        assert [c.name for c in result.checks] == [
            "Context",
            "Type",
            "Issuance Date",
            "Expiry",
            "Issuer Trust",
            "Proof",
            "Signature Verification",
            "Credential Subject",
        ]
        assert result.issuer == "did:web:government.eu"
        assert result.credential_id == credential_data["id"]

    def test_signature_check_is_simulated(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        result = _validate(credential_data, now)
        signature = next(c for c in result.checks if c.name == "Signature Verification")

        assert signature.details == SIMULATED_SIGNATURE_DETAILS

    def test_missing_proof_is_invalid(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        del credential_data["proof"]

        result = _validate(credential_data, now)

        assert result.is_valid is False
        assert any("proof" in error for error in result.errors)
        assert result.credential_summary.has_proof is False

    def test_incomplete_proof_is_invalid(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        del credential_data["proof"]["verificationMethod"]

        result = _validate(credential_data, now)

        assert result.is_valid is False
        assert "Credential proof is missing required fields" in result.errors

    def test_missing_base_context_and_type(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        credential_data["@context"] = ["https://example.org/context"]
        credential_data["type"] = ["IdentityCredential"]

        result = _validate(credential_data, now)

        assert _check(result, "Context") is False
        assert _check(result, "Type") is False
        assert len(result.errors) == 2

    def test_future_issuance_date_is_invalid(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        credential_data["issuanceDate"] = "2026-01-01T00:00:00Z"

        result = _validate(credential_data, now)

        assert _check(result, "Issuance Date") is False
        assert "Credential has invalid or future issuance date" in result.errors

    def test_expired_credential_is_invalid(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        credential_data["expirationDate"] = "2025-05-01T00:00:00Z"

        result = _validate(credential_data, now)

        assert result.is_valid is False
        assert "Credential expired on 2025-05-01T00:00:00Z" in result.errors

    def test_expiring_soon_warns(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        credential_data["expirationDate"] = "2025-06-15T00:00:00Z"

        result = _validate(credential_data, now)

        assert result.is_valid is True
        assert any("expires within 30 days" in w for w in result.warnings)

    def test_warning_window_is_configurable(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        credential_data["expirationDate"] = "2025-06-15T00:00:00Z"
        validator = CredentialValidator(
            config=EngineConfiguration(expiry_warning_days=7)
        )

        result = _validate(credential_data, now, validator=validator)

        assert result.warnings == ()

    def test_no_expiration_warns(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        del credential_data["expirationDate"]

        result = _validate(credential_data, now)

        assert result.is_valid is True
        assert _check(result, "Expiry") is True
        assert any("no expiration date" in w for w in result.warnings)

    def test_unparseable_expiration_is_invalid(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        credential_data["expirationDate"] = "someday"

        result = _validate(credential_data, now)

        assert result.is_valid is False
        assert "Credential has an invalid expiration date (someday)" in result.errors

    def test_untrusted_issuer_only_warns(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        credential_data["issuer"] = "did:web:unknown.org"

        result = _validate(credential_data, now)

        assert result.is_valid is True
        assert _check(result, "Issuer Trust") is False
        assert result.errors == ()
        assert any("not in the trusted issuers list" in w for w in result.warnings)

    def test_empty_subject_does_not_invalidate(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        credential_data["credentialSubject"] = {}

        result = _validate(credential_data, now)

        assert result.is_valid is True
        assert _check(result, "Credential Subject") is False
        assert result.errors == ()
        assert "Credential subject is empty" in result.warnings

    def test_credential_id_falls_back_to_subject(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        del credential_data["id"]

        result = _validate(credential_data, now)

        assert result.credential_id == "did:key:z6MkholderKey"

    def test_required_types(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        options = ValidationOptions(required_types=("IdentityCredential", "PIDCredential"))

        result = _validate(credential_data, now, options)

        assert _check(result, "Required Types") is False
        assert "Missing required credential types: PIDCredential" in result.errors

    def test_disabled_checks_are_omitted(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        del credential_data["proof"]
        credential_data["expirationDate"] = "2020-01-01T00:00:00Z"
        options = ValidationOptions(
            check_expiry=False, verify_signature=False, check_issuer_trust=False
        )

        result = _validate(credential_data, now, options)

        assert result.is_valid is True
        assert [c.name for c in result.checks] == [
            "Context",
            "Type",
            "Issuance Date",
            "Credential Subject",
        ]

    def test_naive_reference_time_is_utc(
        self, credential_data: dict[str, Any]
    ) -> None:
        result = _validate(credential_data, datetime(2025, 6, 1, 12, 0))

        assert result.is_valid is True

    def test_result_serialises_camel_case(
        self, credential_data: dict[str, Any], now: datetime
    ) -> None:
        dumped = _validate(credential_data, now).model_dump(by_alias=True)

        assert dumped["isValid"] is True
        assert dumped["credentialSummary"]["hasProof"] is True
        assert dumped["credentialSummary"]["types"] == (
            "VerifiableCredential",
            "IdentityCredential",
        )
