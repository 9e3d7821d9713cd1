"""Main entry point for the Aegis compliance engine.

This module provides the command-line interface for Aegis, including
commands for:
- Checking files against regulatory frameworks
- Scanning files for PII
- Scoring entity risk
- Validating verifiable credentials
- Running agent tool hooks
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from aegis.cli import (
    check_command,
    compliance_gate_hook_command,
    list_frameworks_command,
    pii_scan_hook_command,
    risk_command,
    scan_command,
    verify_command,
)

# Load environment variables from a .env file in the working directory
load_dotenv()

app = typer.Typer(name="aegis")
hook_app = typer.Typer(name="hook", help="Agent tool hooks (JSON on stdin).")
app.add_typer(hook_app, name="hook")


@app.command()
def check(
    target: Annotated[
        Path,
        typer.Argument(
            help="File or directory to check",
            exists=True,
            file_okay=True,
            dir_okay=True,
            readable=True,
        ),
    ],
    frameworks: Annotated[
        str | None,
        typer.Option(
            "--frameworks",
            "-f",
            help="Comma-separated frameworks to check (e.g. gdpr,eidas2,aml). Defaults to all",
        ),
    ] = None,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Output format: table or json",
            case_sensitive=False,
            rich_help_panel="Output",
        ),
    ] = "table",
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Exit with status 1 on non-compliance or critical PII",
        ),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Check files for PII and compliance with regulatory frameworks.

    Example:
        aegis check ./src --frameworks gdpr,aml
        aegis check config.yaml --output json --strict

    """
    check_command(target, frameworks, output, strict, log_level)


@app.command()
def scan(
    file: Annotated[
        Path,
        typer.Argument(
            help="File to scan",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    content_type: Annotated[
        str | None,
        typer.Option(
            "--content-type",
            "-t",
            help="Content type: code, text, config or log. Inferred from the extension by default",
        ),
    ] = None,
    redact: Annotated[
        bool,
        typer.Option("--redact", help="Show the content with PII redacted"),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Scan a file for personally identifiable information."""
    scan_command(file, content_type, redact, log_level)


@app.command()
def risk(  # noqa: PLR0913 - CLI entry point with many options
    entity: Annotated[str, typer.Argument(help="Entity identifier")],
    entity_type: Annotated[
        str,
        typer.Option(
            "--type",
            help="Entity type: customer, transaction, process, system or vendor",
        ),
    ] = "customer",
    jurisdiction: Annotated[
        str | None,
        typer.Option("--jurisdiction", "-j", help="Jurisdiction of the entity"),
    ] = None,
    factors_file: Annotated[
        Path | None,
        typer.Option(
            "--factors",
            help="JSON file with risk factors. Defaults to the sample profile",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    previous_incidents: Annotated[
        int,
        typer.Option("--previous-incidents", min=0, help="Number of previous incidents"),
    ] = 0,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Output format: table or json",
            case_sensitive=False,
            rich_help_panel="Output",
        ),
    ] = "table",
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Assess the risk of an entity.

    Example:
        aegis risk CUST-001 --type customer --jurisdiction EU
        aegis risk TX-42 --type transaction --factors factors.json

    """
    risk_command(
        entity,
        entity_type,
        jurisdiction,
        factors_file,
        previous_incidents,
        output,
        log_level,
    )


@app.command()
def verify(  # noqa: PLR0913 - CLI entry point with many options
    credential_file: Annotated[
        Path,
        typer.Argument(
            help="JSON file holding a W3C Verifiable Credential",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    no_expiry: Annotated[
        bool, typer.Option("--no-expiry", help="Skip the expiry check")
    ] = False,
    no_signature: Annotated[
        bool,
        typer.Option("--no-signature", help="Skip the proof and signature checks"),
    ] = False,
    no_trust: Annotated[
        bool, typer.Option("--no-trust", help="Skip the issuer trust check")
    ] = False,
    require_type: Annotated[
        list[str] | None,
        typer.Option(
            "--require-type", help="Credential type that must be present (repeatable)"
        ),
    ] = None,
    output: Annotated[
        str,
        typer.Option(
            "--output",
            "-o",
            help="Output format: table or json",
            case_sensitive=False,
            rich_help_panel="Output",
        ),
    ] = "table",
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """Validate a verifiable credential. Exits with status 1 when invalid."""
    verify_command(
        credential_file,
        check_expiry=not no_expiry,
        verify_signature=not no_signature,
        check_issuer_trust=not no_trust,
        required_types=require_type,
        output=output,
        log_level=log_level,
    )


@app.command(name="ls-frameworks")
def list_frameworks(
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "INFO",
) -> None:
    """List the regulatory frameworks in the catalog."""
    list_frameworks_command(log_level)


@hook_app.command(name="pii-scan")
def pii_scan_hook(
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "WARNING",
) -> None:
    """Block Edit/Write tool calls that would write PII."""
    pii_scan_hook_command(log_level)


@hook_app.command(name="compliance-gate")
def compliance_gate_hook(
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
            case_sensitive=False,
        ),
    ] = "WARNING",
) -> None:
    """Block git commits whose staged files contain secrets."""
    compliance_gate_hook_command(log_level)


if __name__ == "__main__":
    app()
