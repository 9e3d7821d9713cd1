"""CLI command implementation for verifiable credential validation."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from aegis.cli.check import validate_output
from aegis.cli.errors import cli_error_handler
from aegis.cli.formatting import OutputFormatter
from aegis.config import EngineConfiguration
from aegis.credentials.types import ValidationOptions, VerifiableCredential
from aegis.credentials.validator import CredentialValidator
from aegis.interfaces.credentials import CredentialVerifyRequest, verify_credential
from aegis.logging import setup_logging

logger = logging.getLogger(__name__)


def verify_command(  # noqa: PLR0913 - mirrors the CLI options
    credential_file: Path,
    check_expiry: bool = True,
    verify_signature: bool = True,
    check_issuer_trust: bool = True,
    required_types: list[str] | None = None,
    output: str = "table",
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for validating a credential file.

    Exits with status 1 when the credential is invalid.

    Args:
        credential_file: JSON file holding a W3C Verifiable Credential
        check_expiry: Run the expiry check
        verify_signature: Run the proof and signature checks
        check_issuer_trust: Run the issuer trust check
        required_types: Credential types that must be present
        output: Output format, ``table`` or ``json``
        log_level: Logging level

    """
    setup_logging(level=log_level)
    with cli_error_handler("verify", "Credential verification failed"):
        output = validate_output(output, "verify")

        credential = VerifiableCredential.model_validate_json(
            credential_file.read_text(encoding="utf-8")
        )
        request = CredentialVerifyRequest(
            credential=credential,
            options=ValidationOptions(
                check_expiry=check_expiry,
                verify_signature=verify_signature,
                check_issuer_trust=check_issuer_trust,
                required_types=tuple(required_types or ()),
            ),
        )
        validator = CredentialValidator(config=EngineConfiguration.from_environment())
        result = verify_credential(request, validator=validator)
        logger.info(
            "Credential %s from %s is %s",
            result.credential_id,
            result.issuer,
            "valid" if result.is_valid else "invalid",
        )

        if output == "json":
            typer.echo(result.model_dump_json(by_alias=True, indent=2))
        else:
            OutputFormatter().format_validation_result(result)

        if not result.is_valid:
            raise typer.Exit(1)
