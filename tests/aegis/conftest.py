"""Shared fixtures for the aegis test suite."""

from datetime import UTC, datetime
from typing import Any

import pytest


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for date checks."""
    return datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def credential_data() -> dict[str, Any]:
    """A well-formed credential from a trusted issuer, valid at ``now``."""
    return {
        "@context": [
            "https://www.w3.org/2018/credentials/v1",
            "https://www.w3.org/2018/credentials/examples/v1",
        ],
        "id": "urn:uuid:3978344f-8596-4c3a-a978-8fcaba3903c5",
        "type": ["VerifiableCredential", "IdentityCredential"],
        "issuer": {"id": "did:web:government.eu", "name": "EU Identity Office"},
        "issuanceDate": "2025-01-15T09:00:00Z",
        "expirationDate": "2027-01-15T09:00:00Z",
        "credentialSubject": {
            "id": "did:key:z6MkholderKey",
            "givenName": "Alex",
        },
        "proof": {
            "type": "Ed25519Signature2020",
            "created": "2025-01-15T09:00:00Z",
            "verificationMethod": "did:web:government.eu#key-1",
            "proofPurpose": "assertionMethod",
            "proofValue": "z58DAdFfa9SkqZMVPxAQpic7ndSayn1PzZs6ZjWp1CktyGesjuTSwRdo",
        },
    }
